#!/usr/bin/env python3
"""Shelf CLI - personal book list with offline cache."""
import argparse
import asyncio
import locale
import sys
import json
from tabulate import tabulate
from booklist.async_client import AsyncBookApiClient
from booklist.cache import LocalCache
from booklist.client import OpenLibraryClient
from booklist.config import Config
from booklist.database import Database
from booklist.errors import BookListError
from booklist.loader import CollectionLoader
from booklist.service import BookService
from booklist.stats import aggregate
from booklist.theme import ThemePreference
from booklist.views import derive_view, FILTER_TYPES, SORT_KEYS
import logging

logger = logging.getLogger(__name__)

BOOK_FIELDS = ("nom", "auteur", "editeur", "annee", "theme", "cover", "rating")


def setup_database(config: Config) -> Database:
    """Database settings; the connection is opened on first use."""
    return Database(config.DATABASE_URL)


def book_fields_from_args(args) -> dict:
    """Collect the book fields given on the command line."""
    fields = {name: getattr(args, name) for name in BOOK_FIELDS if getattr(args, name, None) is not None}
    if getattr(args, "lu", None) is not None:
        fields["lu"] = args.lu
    if getattr(args, "favorite", None) is not None:
        fields["favorite"] = args.favorite
    return fields


def display_books(books, format_type: str):
    """Display books in specified format."""
    if format_type == "table":
        headers = ["ID", "Titre", "Auteur", "Année", "Thème", "Statut", "Fav", "Note"]
        rows = [
            [
                book.id,
                book.nom[:40] + "..." if len(book.nom) > 40 else book.nom,
                book.auteur[:30] + "..." if len(book.auteur) > 30 else book.auteur,
                book.annee or "",
                book.theme or "",
                book.status_label,
                "♥" if book.favorite else "",
                book.stars if book.rating else ""
            ]
            for book in books
        ]
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([book.to_dict() for book in books], indent=2, ensure_ascii=False))

    elif format_type == "compact":
        for i, book in enumerate(books, 1):
            print(f"{i}. {book.nom} - {book.auteur}")


async def list_books(args, loader: CollectionLoader, service: BookService):
    books = await loader.load_collection()
    if loader.last_source == "cache":
        last_sync = loader.cache.get_last_sync()
        logger.warning(f"⚠️  API unreachable - showing cached books (last sync: {last_sync or 'unknown'})")

    view = derive_view(books, query=args.query, filter_type=args.filter, sort_by=args.sort)
    if not view:
        print("Aucun livre")
        return
    display_books(view, args.format)


async def show_stats(args, loader: CollectionLoader, service: BookService):
    stats = aggregate(await loader.load_collection())

    print("\n" + "=" * 40)
    print("STATISTIQUES")
    print("=" * 40)
    print(f"Total:        {stats.total}")
    print(f"Lus:          {stats.read}")
    print(f"Non lus:      {stats.unread}")
    print(f"Favoris:      {stats.favorites}")
    print(f"Note moyenne: {stats.avg_rating}")
    print("=" * 40 + "\n")


async def show_book(args, loader: CollectionLoader, service: BookService):
    book = await service.get_book(args.id)
    notes = await service.list_notes(args.id)

    with OpenLibraryClient(base_url=args.config.OPENLIBRARY_URL, timeout=args.config.EDITION_LOOKUP_TIMEOUT) as lookup:
        editions = lookup.get_editions_count(book.nom)

    rows = [
        ["Titre", book.nom],
        ["Auteur", book.auteur],
        ["Éditeur", book.editeur or ""],
        ["Année", book.annee or ""],
        ["Thème", book.theme or ""],
        ["Statut", book.status_label],
        ["Favori", "Oui" if book.favorite else "Non"],
        ["Note", book.stars],
        ["Éditions (OpenLibrary)", editions or "N/A"],
    ]
    print("\n" + tabulate(rows, tablefmt="plain"))

    if notes:
        print("\nNotes:")
        for note in notes:
            print(f"  [{note.created_at:%Y-%m-%d %H:%M}] {note.content}")


async def add_book(args, loader: CollectionLoader, service: BookService):
    book = await service.create_book(book_fields_from_args(args))
    print(f"✅ Livre ajouté: {book.nom} (id {book.id})")


async def edit_book(args, loader: CollectionLoader, service: BookService):
    current = await service.get_book(args.id)
    fields = current.to_dict()
    fields.update(book_fields_from_args(args))
    book = await service.update_book(args.id, fields)
    print(f"✅ Livre modifié: {book.nom}")


async def delete_book(args, loader: CollectionLoader, service: BookService):
    await service.delete_book(args.id)
    print("✅ Livre supprimé")


async def toggle_read(args, loader: CollectionLoader, service: BookService):
    book = await service.toggle_read(await service.get_book(args.id))
    print("Livre marqué comme lu" if book.lu else "Livre marqué comme non lu")


async def toggle_favorite(args, loader: CollectionLoader, service: BookService):
    book = await service.toggle_favorite(await service.get_book(args.id))
    print("Ajouté aux favoris" if book.favorite else "Retiré des favoris")


async def rate_book(args, loader: CollectionLoader, service: BookService):
    book = await service.set_rating(await service.get_book(args.id), args.rating)
    print(f"{book.nom}: {book.stars}")


async def add_note(args, loader: CollectionLoader, service: BookService):
    note = await service.add_note(args.id, args.content)
    print(f"✅ Note ajoutée ({note.created_at:%Y-%m-%d %H:%M})")


async def list_notes(args, loader: CollectionLoader, service: BookService):
    notes = await service.list_notes(args.id)
    if not notes:
        print("Aucune note")
    for note in notes:
        print(f"[{note.created_at:%Y-%m-%d %H:%M}] {note.content}")


COMMANDS = {
    "list": list_books,
    "stats": show_stats,
    "show": show_book,
    "add": add_book,
    "edit": edit_book,
    "delete": delete_book,
    "toggle-read": toggle_read,
    "toggle-favorite": toggle_favorite,
    "rate": rate_book,
    "note": add_note,
    "notes": list_notes,
}


async def run_api_command(args, config: Config, db: Database):
    """Run a command that talks to the book API."""
    cache = LocalCache(db, namespace=config.CACHE_NAMESPACE)

    async with AsyncBookApiClient(base_url=config.BOOK_API_URL, timeout=config.BOOK_API_TIMEOUT) as client:
        loader = CollectionLoader(client, cache)
        service = BookService(client)
        await COMMANDS[args.command](args, loader, service)


def manage_theme(args, db: Database):
    theme = ThemePreference(db)
    theme.load()
    if args.toggle:
        theme.toggle()
    print(f"Thème: {theme.mode}")


def manage_cache(args, config: Config, db: Database):
    cache = LocalCache(db, namespace=config.CACHE_NAMESPACE)

    if args.clear:
        cache.clear_all()
        print("✅ Cache local effacé")
        return

    books = cache.load_books()
    print(f"Livres en cache: {len(books) if books is not None else 0}")
    print(f"Dernière synchro: {cache.get_last_sync() or 'jamais'}")
    print(f"Synchro en attente: {'oui' if cache.has_pending_sync() else 'non'}")


def add_book_arguments(parser, required: bool):
    parser.add_argument("--nom", required=required, help="Titre")
    parser.add_argument("--auteur", required=required, help="Auteur")
    parser.add_argument("--editeur", help="Éditeur")
    parser.add_argument("--annee", help="Année (YYYY)")
    parser.add_argument("--theme", help="Thème / genre")
    parser.add_argument("--cover", help="URL de couverture")
    parser.add_argument("--rating", type=int, help="Note de 0 à 5")
    parser.add_argument("--lu", action=argparse.BooleanOptionalAction, default=None, help="Déjà lu")
    parser.add_argument("--favorite", action=argparse.BooleanOptionalAction, default=None, help="Favori")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Shelf - personal book list with offline cache",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Unread books by author
  %(prog)s list --filter unread --sort auteur

  # Search title or author
  %(prog)s list --query orwell

  # Add a book
  %(prog)s add --nom "Dune" --auteur "Frank Herbert" --annee 1965

  # Switch to dark theme
  %(prog)s theme --toggle
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    list_parser = subparsers.add_parser("list", help="List books")
    list_parser.add_argument("--query", default="", help="Match title or author")
    list_parser.add_argument("--filter", choices=FILTER_TYPES, default="all", help="Filter (default: all)")
    list_parser.add_argument("--sort", choices=SORT_KEYS, default="titre", help="Sort key (default: titre)")
    list_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")

    subparsers.add_parser("stats", help="Show library statistics")

    show_parser = subparsers.add_parser("show", help="Show one book with notes and edition count")
    show_parser.add_argument("id", help="Book id")

    add_parser = subparsers.add_parser("add", help="Add a book")
    add_book_arguments(add_parser, required=True)

    edit_parser = subparsers.add_parser("edit", help="Edit a book")
    edit_parser.add_argument("id", help="Book id")
    add_book_arguments(edit_parser, required=False)

    for name, help_text in [
        ("delete", "Delete a book"),
        ("toggle-read", "Toggle read status"),
        ("toggle-favorite", "Toggle favorite"),
        ("notes", "List notes of a book"),
    ]:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("id", help="Book id")

    rate_parser = subparsers.add_parser("rate", help="Rate a book")
    rate_parser.add_argument("id", help="Book id")
    rate_parser.add_argument("rating", type=int, help="0 to 5 (0 = unrated)")

    note_parser = subparsers.add_parser("note", help="Attach a note to a book")
    note_parser.add_argument("id", help="Book id")
    note_parser.add_argument("content", help="Note text")

    theme_parser = subparsers.add_parser("theme", help="Show or toggle the theme")
    theme_parser.add_argument("--toggle", action="store_true", help="Switch light/dark")

    cache_parser = subparsers.add_parser("cache", help="Inspect the local cache")
    cache_parser.add_argument("--clear", action="store_true", help="Remove the cached snapshot")

    return parser


def main():
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = Config()
    args.config = config

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"System locale unavailable, sorting with C collation: {e}")

    try:
        with setup_database(config) as db:
            if args.command == "theme":
                manage_theme(args, db)
            elif args.command == "cache":
                manage_cache(args, config, db)
            else:
                asyncio.run(run_api_command(args, config, db))

    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)
    except BookListError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"❌ Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
