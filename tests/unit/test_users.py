import pytest
from sqlalchemy import func, select

from core.auth.interface import AuthUser
from core.db import Conversation, Trip, TripRequest, User
from core.errors import ConflictError, ErrorCode, ForbiddenError, NotFoundError
from core.models.enums import Decision
from core.models.user import DEFAULT_PROFILE_IMAGE, UserCreate, UserUpdate
from core.services.trip_requests import respond_to_request, submit_request
from core.services.users import delete_user, get_user, register_user, resolve_caller, update_profile


def _auth_user(**overrides):
    data = {"user_id": "user_abc", "email": "marie@example.com", "name": "Marie", "metadata": {}}
    return AuthUser(**{**data, **overrides})


def test_register_applies_default_avatar(store):
    user = register_user(store, UserCreate(email="a@example.com", name="A"))
    assert user.profile_image == DEFAULT_PROFILE_IMAGE
    assert get_user(store, user.id).email == "a@example.com"


def test_register_duplicate_email(store):
    register_user(store, UserCreate(email="a@example.com", name="A"))
    with pytest.raises(ConflictError) as exc_info:
        register_user(store, UserCreate(email="a@example.com", name="Other"))
    assert exc_info.value.code == ErrorCode.EMAIL_TAKEN


def test_get_unknown_user(store):
    with pytest.raises(NotFoundError) as exc_info:
        get_user(store, 77)
    assert exc_info.value.code == ErrorCode.USER_NOT_FOUND


def test_update_profile_only_touches_set_fields(store, make_user):
    user = make_user("Marie", phone="0612345678")

    updated = update_profile(store, user.id, user.id, UserUpdate(name="Marie D."))

    assert updated.name == "Marie D."
    assert updated.phone == "0612345678"


def test_update_someone_elses_profile_forbidden(store, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")
    with pytest.raises(ForbiddenError):
        update_profile(store, alice.id, bob.id, UserUpdate(name="Hacked"))


def test_delete_user_cascades(store, make_user, make_trip):
    owner, requester = make_user("Owner"), make_user("Requester")
    trip = make_trip(owner.id)
    created = submit_request(store, trip.id, requester.id)
    respond_to_request(store, created.id, owner.id, Decision.ACCEPTED)

    delete_user(store, owner.id, owner.id)

    with store.session() as session:
        assert session.get(User, owner.id) is None
        assert session.scalar(select(func.count(Trip.id))) == 0
        assert session.scalar(select(func.count(TripRequest.id))) == 0
        assert session.scalar(select(func.count(Conversation.id))) == 0


def test_delete_other_user_forbidden(store, make_user):
    alice, bob = make_user("Alice"), make_user("Bob")
    with pytest.raises(ForbiddenError):
        delete_user(store, alice.id, bob.id)


def test_resolve_caller_provisions_new_user(store):
    user_id = resolve_caller(store, _auth_user(phone="0600000000", image_url="https://img/x.png"))

    user = get_user(store, user_id)
    assert user.email == "marie@example.com"
    assert user.name == "Marie"
    assert user.phone == "0600000000"
    assert user.profile_image == "https://img/x.png"


def test_resolve_caller_is_stable(store):
    first = resolve_caller(store, _auth_user())
    assert resolve_caller(store, _auth_user()) == first
    with store.session() as session:
        assert session.scalar(select(func.count(User.id))) == 1


def test_resolve_caller_links_existing_email(store, make_user):
    existing = make_user("Marie", email="marie@example.com")

    assert resolve_caller(store, _auth_user()) == existing.id
    with store.session() as session:
        assert session.get(User, existing.id).auth_subject == "user_abc"


def test_resolve_caller_without_email(store):
    user_id = resolve_caller(store, _auth_user(email="", name=""))
    user = get_user(store, user_id)
    assert user.email == "user_abc@users.invalid"
    assert user.name == "user_abc"
