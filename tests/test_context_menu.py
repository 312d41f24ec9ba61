"""Tests for context menu labels and external entries."""

import pytest

from messenger_shell.core.context_menu import (
    DEFAULT_LANGUAGE,
    LABELS,
    ExternalEntry,
    external_entries,
    language_code,
)


@pytest.mark.parametrize(
    "locale_name, expected",
    [
        ("de_DE", "de"),
        ("de-AT", "de"),
        ("DE", "de"),
        ("en_US", "en"),
        ("fr_FR", "en"),
        ("C", "en"),
        ("", "en"),
        (None, "en"),
    ],
)
def test_language_code(locale_name, expected):
    assert language_code(locale_name) == expected


def test_every_language_has_the_same_labels():
    keys = set(LABELS[DEFAULT_LANGUAGE])

    for labels in LABELS.values():
        assert set(labels) == keys


def test_entries_follow_link_image_video_order():
    entries = external_entries(
        "en_GB",
        link_url="https://a.example/link",
        image_url="https://a.example/img.png",
        video_url="https://a.example/clip.mp4",
    )

    assert entries == [
        ExternalEntry("Open link in browser", "https://a.example/link"),
        ExternalEntry("Open image in browser", "https://a.example/img.png"),
        ExternalEntry("Open video in browser", "https://a.example/clip.mp4"),
    ]


def test_only_present_urls_produce_entries():
    entries = external_entries("de_DE", image_url="https://a.example/img.png")

    assert entries == [ExternalEntry("Bild im Browser öffnen", "https://a.example/img.png")]


def test_no_urls_no_entries():
    assert external_entries("en_US") == []
