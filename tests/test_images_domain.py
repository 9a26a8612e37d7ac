"""Tests for encoded image values."""

import pytest

from food_photographer.domain.images import (
    EncodedImage,
    GeneratedImage,
    file_extension,
    new_image_id,
)


def test_to_data_url_is_self_describing() -> None:
    image = EncodedImage("image/jpeg", b"fake")

    assert image.to_data_url() == "data:image/jpeg;base64,ZmFrZQ=="


def test_with_image_keeps_identity() -> None:
    original = GeneratedImage(
        id="soup-1", dish_name="Soup", image=EncodedImage("image/jpeg", b"a")
    )

    edited = original.with_image(EncodedImage("image/png", b"b"))

    assert (edited.id, edited.dish_name) == ("soup-1", "Soup")
    assert edited.image.mime_type == "image/png"


def test_new_image_id_slugs_dish_name() -> None:
    image_id = new_image_id("Crème Brûlée & Friends!")

    assert image_id.startswith("cr-me-br-l-e-friends-")
    assert new_image_id("Soup") != new_image_id("Soup")


def test_new_image_id_handles_names_without_letters() -> None:
    assert new_image_id("???").startswith("dish-")


@pytest.mark.parametrize(
    ("mime_type", "extension"),
    [("image/jpeg", "jpg"), ("image/png", "png"), ("image/svg+xml", "svg")],
)
def test_file_extension(mime_type: str, extension: str) -> None:
    assert file_extension(mime_type) == extension
