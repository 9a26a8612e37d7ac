"""Tests for the AI backend adapters."""

import asyncio
import base64
import json
from types import SimpleNamespace

import pytest
from google.genai import types

from food_photographer.adapters.gemini_image_client import GeminiImageClient
from food_photographer.adapters.gemini_menu_client import GeminiMenuClient
from food_photographer.adapters.openai_image_client import OpenAIImageClient
from food_photographer.adapters.openai_menu_client import OpenAIMenuClient
from food_photographer.domain.images import EncodedImage
from food_photographer.services.menu import DISH_LIST_SCHEMA


class _Recorder:
    """Async callable that records kwargs and returns a canned response."""

    def __init__(self, response: object) -> None:
        self.response = response
        self.calls: list[dict[str, object]] = []

    async def __call__(self, **kwargs: object) -> object:
        self.calls.append(kwargs)
        return self.response


def _fake_genai(
    content: object = None, images: object = None
) -> tuple[SimpleNamespace, _Recorder, _Recorder]:
    generate_content = _Recorder(content)
    generate_images = _Recorder(images)
    models = SimpleNamespace(
        generate_content=generate_content, generate_images=generate_images
    )
    fake = SimpleNamespace(aio=SimpleNamespace(models=models))
    return fake, generate_content, generate_images


def test_gemini_menu_client_requests_json_schema() -> None:
    payload = [{"name": "Soup", "description": "Hot"}]
    fake, generate_content, _ = _fake_genai(
        content=SimpleNamespace(text=f" {json.dumps(payload)}\n")
    )
    client = GeminiMenuClient(client=fake)

    result = asyncio.run(
        client.extract_dishes(
            model="gemini-2.5-flash", prompt="Menu", schema=DISH_LIST_SCHEMA
        )
    )

    assert result == payload
    config = generate_content.calls[0]["config"]
    assert isinstance(config, types.GenerateContentConfig)
    assert config.response_mime_type == "application/json"
    assert config.response_json_schema == DISH_LIST_SCHEMA


def test_gemini_menu_client_rejects_empty_text() -> None:
    fake, _, _ = _fake_genai(content=SimpleNamespace(text=None))
    client = GeminiMenuClient(client=fake)

    with pytest.raises(RuntimeError):
        asyncio.run(client.extract_dishes(model="m", prompt="Menu", schema={}))


def test_gemini_image_client_generates_images() -> None:
    response = types.GenerateImagesResponse(
        generated_images=[
            types.GeneratedImage(image=types.Image(image_bytes=b"jpeg-bytes"))
        ]
    )
    fake, _, generate_images = _fake_genai(images=response)
    client = GeminiImageClient(client=fake)

    result = asyncio.run(
        client.generate_images(
            model="imagen-4.0-generate-001",
            prompt="Soup",
            count=1,
            mime_type="image/jpeg",
            aspect_ratio="4:3",
        )
    )

    assert result == [b"jpeg-bytes"]
    config = generate_images.calls[0]["config"]
    assert isinstance(config, types.GenerateImagesConfig)
    assert config.number_of_images == 1
    assert config.output_mime_type == "image/jpeg"
    assert config.aspect_ratio == "4:3"


def test_gemini_image_client_returns_no_images_when_filtered() -> None:
    fake, _, _ = _fake_genai(images=types.GenerateImagesResponse(generated_images=None))
    client = GeminiImageClient(client=fake)

    result = asyncio.run(
        client.generate_images(
            model="m", prompt="p", count=1, mime_type="image/jpeg", aspect_ratio="4:3"
        )
    )

    assert result == []


def _content_response(*parts: types.Part) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(content=types.Content(role="model", parts=list(parts)))
        ]
    )


def test_gemini_image_client_edits_with_image_modality() -> None:
    response = _content_response(
        types.Part(text="Here you go"),
        types.Part(inline_data=types.Blob(mime_type="image/png", data=b"edited")),
    )
    fake, generate_content, _ = _fake_genai(content=response)
    client = GeminiImageClient(client=fake)

    result = asyncio.run(
        client.edit_image(
            model="gemini-2.5-flash-image",
            image=EncodedImage("image/jpeg", b"original"),
            instruction="add steam",
        )
    )

    assert result == EncodedImage("image/png", b"edited")
    call = generate_content.calls[0]
    image_part, instruction = call["contents"]
    assert image_part.inline_data.data == b"original"
    assert image_part.inline_data.mime_type == "image/jpeg"
    assert instruction == "add steam"
    assert call["config"].response_modalities == ["IMAGE"]


def test_gemini_image_client_returns_none_without_image_part() -> None:
    fake, _, _ = _fake_genai(content=_content_response(types.Part(text="Sorry")))
    client = GeminiImageClient(client=fake)

    result = asyncio.run(
        client.edit_image(
            model="m", image=EncodedImage("image/jpeg", b"x"), instruction="add"
        )
    )

    assert result is None


def _fake_openai(
    output_text: str = "", images: list[object] | None = None
) -> tuple[SimpleNamespace, _Recorder, _Recorder, _Recorder]:
    responses_create = _Recorder(SimpleNamespace(output_text=output_text))
    images_response = SimpleNamespace(data=images)
    images_generate = _Recorder(images_response)
    images_edit = _Recorder(images_response)
    fake = SimpleNamespace(
        responses=SimpleNamespace(create=responses_create),
        images=SimpleNamespace(generate=images_generate, edit=images_edit),
    )
    return fake, responses_create, images_generate, images_edit


def test_openai_menu_client_wraps_and_unwraps_schema() -> None:
    payload = {"dishes": [{"name": "Soup", "description": "Hot"}]}
    fake, responses_create, _, _ = _fake_openai(output_text=json.dumps(payload))
    client = OpenAIMenuClient(client=fake, reasoning_effort="low")

    result = asyncio.run(
        client.extract_dishes(model="gpt-5.2", prompt="Menu", schema=DISH_LIST_SCHEMA)
    )

    assert result == payload["dishes"]
    request = responses_create.calls[0]
    text_format = request["text"]["format"]
    assert text_format["strict"] is True
    assert text_format["schema"]["properties"]["dishes"] == DISH_LIST_SCHEMA
    assert request["reasoning"] == {"effort": "low"}
    assert request["store"] is False


def test_openai_menu_client_rejects_missing_root_key() -> None:
    fake, _, _, _ = _fake_openai(output_text=json.dumps({"items": []}))
    client = OpenAIMenuClient(client=fake)

    with pytest.raises(RuntimeError):
        asyncio.run(client.extract_dishes(model="m", prompt="Menu", schema={}))


def test_openai_image_client_generates_jpeg() -> None:
    encoded = base64.b64encode(b"jpeg-bytes").decode()
    fake, _, images_generate, _ = _fake_openai(
        images=[SimpleNamespace(b64_json=encoded)]
    )
    client = OpenAIImageClient(client=fake)

    result = asyncio.run(
        client.generate_images(
            model="gpt-image-1",
            prompt="Soup",
            count=1,
            mime_type="image/jpeg",
            aspect_ratio="4:3",
        )
    )

    assert result == [b"jpeg-bytes"]
    call = images_generate.calls[0]
    assert call["n"] == 1
    assert call["size"] == "1536x1024"
    assert call["output_format"] == "jpeg"


def test_openai_image_client_edit_uploads_image() -> None:
    encoded = base64.b64encode(b"edited").decode()
    fake, _, _, images_edit = _fake_openai(images=[SimpleNamespace(b64_json=encoded)])
    client = OpenAIImageClient(client=fake)

    result = asyncio.run(
        client.edit_image(
            model="gpt-image-1",
            image=EncodedImage("image/jpeg", b"original"),
            instruction="add steam",
        )
    )

    assert result == EncodedImage("image/png", b"edited")
    call = images_edit.calls[0]
    assert call["image"] == ("image.jpg", b"original", "image/jpeg")
    assert call["prompt"] == "add steam"


def test_openai_image_client_edit_without_data_returns_none() -> None:
    fake, _, _, _ = _fake_openai(images=[])
    client = OpenAIImageClient(client=fake)

    result = asyncio.run(
        client.edit_image(
            model="m", image=EncodedImage("image/jpeg", b"x"), instruction="add"
        )
    )

    assert result is None
