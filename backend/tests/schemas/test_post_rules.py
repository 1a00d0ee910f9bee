"""Post Rules: create/update payload rules; the author is never part of the payload."""

from userposts.schemas.post import validate_post_create, validate_post_id, validate_post_update

VALID = {"title": "First post", "body": "Ten or more characters here."}


def test_valid_create_is_accepted():
    result = validate_post_create(VALID)
    assert result.ok
    assert result.value.title == "First post"


def test_short_title_message():
    result = validate_post_create({**VALID, "title": "Hi"})
    assert result.message == "Title must be at least 3 characters long"


def test_long_title_message():
    result = validate_post_create({**VALID, "title": "t" * 101})
    assert result.message == "Title must be at most 100 characters long"


def test_body_is_trimmed_before_length_check():
    result = validate_post_create({**VALID, "body": "   short    "})
    assert result.message == "Body must be at least 10 characters long"


def test_update_cannot_reassign_author():
    result = validate_post_update({"userId": "someone-else"})
    assert not result.ok
    assert '"userId" is not allowed' in result.message


def test_update_with_empty_payload_fails():
    result = validate_post_update({})
    assert result.message == "At least one field must be provided for update"


def test_post_id_check():
    assert validate_post_id("zzz").message == "Invalid Post ID format"
