"""Tests for the theme preference."""
from booklist.theme import ThemePreference, THEME_STORAGE_KEY, DARK_COLORS


def test_default_is_light(store):
    theme = ThemePreference(store)

    assert theme.load() == "light"
    assert theme.is_dark is False


def test_toggle_persists(store):
    theme = ThemePreference(store)
    theme.load()

    theme.toggle()

    assert store.get(THEME_STORAGE_KEY) == "dark"
    assert ThemePreference(store).load() == "dark"
    assert theme.colors is DARK_COLORS


def test_unknown_value_means_light(store):
    store.set(THEME_STORAGE_KEY, "sepia")

    assert ThemePreference(store).load() == "light"


def test_broken_store_still_toggles(broken_store):
    theme = ThemePreference(broken_store)

    assert theme.load() == "light"
    assert theme.toggle() == "dark"
