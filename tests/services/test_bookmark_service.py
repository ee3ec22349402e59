"""Tests for BookmarkService, called directly without HTTP."""
import pytest
from bson import ObjectId
from pymongo.database import Database

from bookmark_api.core.exceptions import ResourceNotFoundException, ValidationException
from bookmark_api.core.settings import Settings
from bookmark_api.models.user import User
from bookmark_api.schemas.bookmark import BookmarkCreate, BookmarkUpdate
from bookmark_api.services.bookmark_service import BookmarkService


@pytest.fixture
def owner() -> User:
    return User(id=1, username="alice", is_active=True, token_version=0)


@pytest.fixture
def stranger() -> User:
    return User(id=2, username="mallory", is_active=True, token_version=0)


@pytest.fixture
def service(mongo_db: Database, test_settings: Settings) -> BookmarkService:
    return BookmarkService(mongo_db, test_settings)


def test_create_then_list(service: BookmarkService, owner: User) -> None:
    result = service.create_bookmark(owner, BookmarkCreate(title="docs", url="https://docs.python.org"))
    assert result == {"title": "docs", "url": "https://docs.python.org"}

    items = service.list_bookmarks(owner)
    assert len(items) == 1
    assert items[0]["owner"] == owner.id
    assert ObjectId.is_valid(items[0]["id"])
    assert "_id" not in items[0]


def test_list_is_scoped_to_owner(service: BookmarkService, owner: User, stranger: User) -> None:
    service.create_bookmark(owner, BookmarkCreate(title="mine", url="https://a.example.com"))
    service.create_bookmark(stranger, BookmarkCreate(title="theirs", url="https://b.example.com"))

    assert [b["title"] for b in service.list_bookmarks(owner)] == ["mine"]
    assert [b["title"] for b in service.list_bookmarks(stranger)] == ["theirs"]


def test_create_stores_timestamps(service: BookmarkService, owner: User) -> None:
    service.create_bookmark(owner, BookmarkCreate(title="docs", url="https://docs.python.org"))
    doc = service.collection.find_one({"title": "docs"})
    assert doc["created_at"] is not None
    assert doc["updated_at"] == doc["created_at"]


def test_check_title_uses_injected_pattern(mongo_db: Database) -> None:
    digits_only = BookmarkService(mongo_db, Settings(ALLOWED_CHARS=r"^[0-9]+$"))
    digits_only.check_title("12345")
    with pytest.raises(ValidationException) as exc_info:
        digits_only.check_title("abc")
    assert exc_info.value.to_dict()["fields"][0]["field"] == "title"


def test_check_title_requires_full_match(service: BookmarkService) -> None:
    with pytest.raises(ValidationException):
        service.check_title("abc!")


def test_update_by_non_owner_raises_not_found(
    service: BookmarkService, owner: User, stranger: User,
) -> None:
    service.create_bookmark(owner, BookmarkCreate(title="mine", url="https://a.example.com"))
    bookmark_id = service.list_bookmarks(owner)[0]["id"]

    with pytest.raises(ResourceNotFoundException) as exc_info:
        service.update_bookmark(stranger, bookmark_id, BookmarkUpdate(title="stolen", url="https://x.example.com"))
    assert exc_info.value.to_dict() == {
        "status": 404,
        "type": "not_found",
        "error": "Bookmark not found.",
        "id": bookmark_id,
    }
    assert service.list_bookmarks(owner)[0]["title"] == "mine"


def test_update_sets_updated_at(service: BookmarkService, owner: User) -> None:
    service.create_bookmark(owner, BookmarkCreate(title="mine", url="https://a.example.com"))
    before = service.collection.find_one({"owner": owner.id})

    service.update_bookmark(owner, str(before["_id"]), BookmarkUpdate(title="renamed", url="https://b.example.com"))
    after = service.collection.find_one({"_id": before["_id"]})
    assert after["title"] == "renamed"
    assert after["updated_at"] >= before["updated_at"]
    assert after["created_at"] == before["created_at"]


@pytest.mark.parametrize("bookmark_id", [None, "", "zzz"])
def test_delete_unmatchable_id_raises_not_found(
    service: BookmarkService, owner: User, bookmark_id,
) -> None:
    with pytest.raises(ResourceNotFoundException):
        service.delete_bookmark(owner, bookmark_id)


def test_delete_returns_removed_summary(service: BookmarkService, owner: User) -> None:
    service.create_bookmark(owner, BookmarkCreate(title="tmp", url="https://tmp.example.com"))
    bookmark_id = service.list_bookmarks(owner)[0]["id"]

    assert service.delete_bookmark(owner, bookmark_id) == {"title": "tmp", "url": "https://tmp.example.com"}
    assert service.list_bookmarks(owner) == []
