"""Tests for ConversationService."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from app.exceptions import NotFound, SelfConversation, ValidationError
from app.models.conversation import Conversation
from app.services.conversation_service import ConversationService
from app.services.message_service import MessageService


def test_get_or_create_stores_canonical_pair(db, setup_user_pair):
    alice, bob = setup_user_pair
    conversation = ConversationService(db).get_or_create(bob.id, alice.id)
    assert conversation.participant_a == min(alice.id, bob.id)
    assert conversation.participant_b == max(alice.id, bob.id)
    assert conversation.created_at == conversation.updated_at


def test_get_or_create_is_idempotent_in_both_directions(db, setup_user_pair):
    alice, bob = setup_user_pair
    svc = ConversationService(db)
    first = svc.get_or_create(alice.id, bob.id)
    second = svc.get_or_create(bob.id, alice.id)
    third = svc.get_or_create(alice.id, bob.id)
    assert first.id == second.id == third.id
    assert db.query(Conversation).count() == 1


def test_get_or_create_returns_existing_untouched(
    db, setup_conversation, setup_user_pair
):
    alice, bob = setup_user_pair
    updated_at = setup_conversation.updated_at
    again = ConversationService(db).get_or_create(bob.id, alice.id)
    assert again.id == setup_conversation.id
    assert again.updated_at == updated_at


def test_self_conversation_rejected(db, setup_user):
    with pytest.raises(SelfConversation):
        ConversationService(db).get_or_create(setup_user.id, setup_user.id)
    assert db.query(Conversation).count() == 0


def test_unknown_target(db, setup_user):
    with pytest.raises(NotFound):
        ConversationService(db).get_or_create(setup_user.id, 999_999)
    assert db.query(Conversation).count() == 0


def test_concurrent_creator_wins_via_unique_constraint(
    db, setup_user_pair, monkeypatch
):
    """
    The existence check misses a row another process just inserted; the
    unique constraint rejects our insert and the winner is returned.
    """
    alice, bob = setup_user_pair
    svc = ConversationService(db)
    winner_id = svc.get_or_create(bob.id, alice.id).id

    real_find = svc._find_by_pair
    calls = []

    def stale_then_real(participant_a, participant_b):
        calls.append((participant_a, participant_b))
        if len(calls) == 1:
            return None
        return real_find(participant_a, participant_b)

    monkeypatch.setattr(svc, "_find_by_pair", stale_then_real)
    conversation = svc.get_or_create(alice.id, bob.id)

    assert conversation.id == winner_id
    assert len(calls) == 2
    assert db.query(Conversation).count() == 1


def test_pair_constraint_rejects_duplicate_rows(db, setup_conversation):
    db.add(
        Conversation(
            participant_a=setup_conversation.participant_a,
            participant_b=setup_conversation.participant_b,
        )
    )
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_list_for_user_most_recent_first(db, setup_user_pair, setup_outsider):
    alice, bob = setup_user_pair
    svc = ConversationService(db)
    with_bob = svc.get_or_create(alice.id, bob.id)
    with_mallory = svc.get_or_create(alice.id, setup_outsider.id)
    MessageService(db).send_message(alice.id, with_bob.id, "ping")

    listed = svc.list_for_user(alice.id)
    assert [c.id for c in listed] == [with_bob.id, with_mallory.id]
    assert [c.id for c in svc.list_for_user(bob.id)] == [with_bob.id]
    assert svc.list_for_user(999_999) == []


def test_list_for_user_limit_and_cursor(db, setup_user_pair, setup_outsider):
    alice, bob = setup_user_pair
    svc = ConversationService(db)
    older = svc.get_or_create(alice.id, bob.id)
    newer = svc.get_or_create(alice.id, setup_outsider.id)
    MessageService(db).send_message(alice.id, newer.id, "latest")

    assert [c.id for c in svc.list_for_user(alice.id, limit=1)] == [newer.id]
    cursor = newer.updated_at
    assert [c.id for c in svc.list_for_user(alice.id, before=cursor)] == [older.id]
    later = cursor + timedelta(seconds=1)
    assert len(svc.list_for_user(alice.id, before=later)) == 2
    with pytest.raises(ValidationError):
        svc.list_for_user(alice.id, limit=0)


def test_get_for_participant_gate(
    db, setup_conversation, setup_user_pair, setup_outsider
):
    alice, _ = setup_user_pair
    svc = ConversationService(db)
    assert svc.get_for_participant(setup_conversation.id, alice.id) is not None
    assert svc.get_for_participant(setup_conversation.id, setup_outsider.id) is None
    assert svc.get_for_participant(999_999, alice.id) is None
