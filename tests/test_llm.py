"""Generation client tests"""

import base64
import json
from io import BytesIO

import pytest
from PIL import Image

from flocore.services.llm import get_llm_service
from flocore.services.llm.base import ImagePart, Message, split_system
from flocore.services.llm.dummy_llm import DummyLLM, sample_from_schema
from flocore.services.specialists.schemas import BOOLEAN, NUMBER, STRING, array, enum, obj


def test_dummy_llm_generate(dummy_llm_service):
    """Plain dummy response"""
    messages = [
        Message(role="system", content="You are a helpful assistant."),
        Message(role="user", content="Hello!"),
    ]

    response = dummy_llm_service.generate(messages)

    assert "Hello!" in response.content
    assert response.model == "dummy-model"
    assert response.usage is not None
    assert response.metadata["provider"] == "dummy"


def test_dummy_llm_chat(dummy_llm_service):
    response = dummy_llm_service.chat("Check rebar spacing", system_message="You are an inspector.")

    assert isinstance(response, str)
    assert "Check rebar spacing" in response


def test_dummy_llm_schema_output(dummy_llm_service):
    """With a response_schema the dummy returns schema-shaped JSON"""
    schema = obj({"intent": enum("structural", "conversation"), "sufficientData": BOOLEAN}).model_json_schema()

    response = dummy_llm_service.generate([Message(role="user", content="x")], response_schema=schema)

    assert json.loads(response.content) == {"intent": "structural", "sufficientData": True}


def test_dummy_llm_stream_joins_to_generate(dummy_llm_service):
    messages = [Message(role="user", content="stream this please")]

    chunks = list(dummy_llm_service.stream_generate(messages))

    assert len(chunks) > 1
    assert "".join(chunks) == dummy_llm_service.generate(messages).content


def test_sample_from_schema():
    schema = obj({"name": STRING, "count": NUMBER, "tags": array(STRING), "ok": BOOLEAN}).model_json_schema()

    sample = sample_from_schema(schema)

    assert sample == {"name": "N/A (dummy)", "count": 0, "tags": ["N/A (dummy)"], "ok": True}


def test_sample_from_schema_nested_models():
    point = obj({"x": NUMBER, "y": NUMBER}, name="Point")
    model = obj(
        {"kind": enum("LINE"), "points": array(point), "origin": point, "note": STRING},
        required=["kind", "points", "origin"],
    )

    sample = sample_from_schema(model.model_json_schema())

    assert sample == {
        "kind": "LINE",
        "points": [{"x": 0, "y": 0}],
        "origin": {"x": 0, "y": 0},
        "note": "N/A (dummy)",
    }
    assert model.model_validate(sample).origin.x == 0


def test_sample_from_schema_refs():
    schema = {
        "$defs": {"Step": {"type": "object", "properties": {"title": {"type": "string"}}}},
        "type": "object",
        "properties": {
            "steps": {"type": "array", "items": {"$ref": "#/$defs/Step"}},
            "extra": {"anyOf": [{"type": "null"}, {"$ref": "#/$defs/Step"}]},
            "tag": {"const": "X"},
        },
    }

    assert sample_from_schema(schema) == {
        "steps": [{"title": "N/A (dummy)"}],
        "extra": {"title": "N/A (dummy)"},
        "tag": "X",
    }


def test_split_system():
    messages = [
        Message(role="system", content="A"),
        Message(role="user", content="hi"),
        Message(role="system", content="B"),
    ]

    system, conversation = split_system(messages)

    assert system == "A\n\nB"
    assert [m.content for m in conversation] == ["hi"]


def test_split_system_without_system():
    system, conversation = split_system([Message(role="user", content="hi")])

    assert system is None
    assert len(conversation) == 1


def test_image_part_base64_roundtrip():
    data = b"\xff\xd8\xff fake jpeg"
    encoded = base64.b64encode(data).decode("ascii")

    part = ImagePart.from_base64(f"data:image/jpeg;base64,{encoded}")

    assert part.data == data
    assert part.to_base64() == encoded


def test_image_part_from_image(sample_image):
    part = ImagePart.from_image(sample_image)

    assert part.mime_type == "image/jpeg"
    assert part.data[:2] == b"\xff\xd8"


def test_image_part_from_png_upload():
    buffer = BytesIO()
    Image.new("RGBA", (3000, 1500), color=(0, 0, 255, 255)).save(buffer, format="PNG")

    part = ImagePart.from_bytes(buffer.getvalue())

    assert part.mime_type == "image/jpeg"
    with Image.open(BytesIO(part.data)) as image:
        assert image.format == "JPEG"
        assert image.size == (1536, 768)


def test_factory_dummy():
    assert isinstance(get_llm_service("dummy"), DummyLLM)


def test_factory_unknown_provider():
    with pytest.raises(ValueError, match="Unsupported LLM provider"):
        get_llm_service("nope")
