import pytest

from coding_gurus.core.errors import ValidationError
from coding_gurus.core.validation import ReplyPayload, ThreadPayload, validate_form


def test_valid_thread_payload_is_parsed_and_stripped():
    payload = validate_form(ThreadPayload, "thread", {"thread[title]": "  Hello ", "thread[content]": "World"})

    assert payload.title == "Hello"
    assert payload.content == "World"


def test_valid_reply_payload_uses_reply_content_field():
    payload = validate_form(ReplyPayload, "reply", {"reply[replyContent]": "Hi"})

    assert payload.reply_content == "Hi"


def test_missing_group_is_reported_once():
    with pytest.raises(ValidationError) as exc_info:
        validate_form(ThreadPayload, "thread", {"something[else]": "x"})

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == '"thread" is required'


def test_every_violation_is_listed():
    with pytest.raises(ValidationError) as exc_info:
        validate_form(ThreadPayload, "thread", {"thread[title]": "   "})

    assert exc_info.value.message == (
        '"thread.title" is not allowed to be empty, "thread.content" is required'
    )


def test_empty_reply_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_form(ReplyPayload, "reply", {"reply[replyContent]": ""})

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == '"reply.replyContent" is not allowed to be empty'


def test_overlong_title_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_form(ThreadPayload, "thread", {"thread[title]": "x" * 201, "thread[content]": "ok"})

    assert "thread.title" in exc_info.value.message
    assert "200" in exc_info.value.message
