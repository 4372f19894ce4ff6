from uuid import uuid4

from blog_entities.entities import Author, PostStatus, User

TEST_POOL = "test_db"

# $argon2id$v=19$m=65536,t=3,p=4$<22 salt chars>$<43 hash chars> is 97 characters
VALID_HASH = "$argon2id$v=19$m=65536,t=3,p=4$" + "c2FsdHNhbHRzYWx0c2FsdA" + "$" + "h" * 43
OTHER_HASH = "$argon2id$v=19$m=65536,t=3,p=4$" + "b3RoZXJzYWx0b3RoZXJzYQ" + "$" + "k" * 43
ARGON2I_HASH = "$argon2i$v=19$m=65536,t=3,p=4$" + "c2FsdHNhbHRzYWx0c2FsdA" + "$" + "h" * 44


def make_author(**overrides) -> Author:
    fields = {
        "id": uuid4(),
        "avatar_url": "https://example.com/avatars/wharris21.png",
        "activation_token": "a" * 32,
        "email": "a@b.com",
        "password_hash": VALID_HASH,
        "username": "wharris21",
    }
    fields.update(overrides)
    return Author(**fields)


def make_user(**overrides) -> User:
    fields = {
        "id": uuid4(),
        "password_hash": VALID_HASH,
        "location": "Albuquerque",
        "email": "user@blogmail.net",
        "phone_number": "+1 505 555 0100",
    }
    fields.update(overrides)
    return User(**fields)


def make_post_status(**overrides) -> PostStatus:
    fields = {"id": uuid4(), "state": "active"}
    fields.update(overrides)
    return PostStatus(**fields)
