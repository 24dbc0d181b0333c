"""Validation of book form fields and notes before they reach the API."""
from typing import Dict, Any

from booklist.errors import ValidationError


def _clean_year(value: Any):
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError("L'année doit être au format YYYY (ex: 2024)")
    text = str(value).strip()
    if len(text) != 4 or not text.isdigit():
        raise ValidationError("L'année doit être au format YYYY (ex: 2024)")
    return int(text)


def validate_rating(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 5:
        raise ValidationError("La note doit être un entier entre 0 et 5")
    return value


def validate_book_fields(data: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Check and clean book fields coming from a create/edit form.

    Args:
        data: Internal field names (``nom``, ``auteur``, ``annee``, ...)
        partial: Only validate the fields present (used for partial updates)

    Returns:
        A new dict with trimmed strings and ``annee`` as an int or None

    Raises:
        ValidationError: title/author missing, bad year or bad rating
    """
    cleaned = dict(data)

    for key in ("nom", "auteur"):
        if partial and key not in data:
            continue
        value = data.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("Le nom et l'auteur sont obligatoires")
        cleaned[key] = value.strip()

    if "editeur" in data and isinstance(data["editeur"], str):
        cleaned["editeur"] = data["editeur"].strip()

    if "annee" in data:
        cleaned["annee"] = _clean_year(data["annee"])

    if "rating" in data:
        cleaned["rating"] = validate_rating(data["rating"])

    return cleaned


def validate_note_content(content: Any) -> str:
    """Return the trimmed note text, rejecting blank notes."""
    if not isinstance(content, str) or not content.strip():
        raise ValidationError("La note ne peut pas être vide")
    return content.strip()
