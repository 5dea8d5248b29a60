"""Tests for the Supabase-backed ConversationRepository."""

from unittest.mock import MagicMock

import pytest

from legal_navigator.errors import PersistenceNotConfiguredError, StorageError
from legal_navigator.services.persistence import ConversationRepository


def _result(data=None, count=None) -> MagicMock:
    result = MagicMock()
    result.data = data
    result.count = count
    return result


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def repo(client):
    return ConversationRepository(client=client)


# ── Conversations ────────────────────────────────────────────


def test_create_conversation(repo, client):
    row = {"id": "conv-1", "session_id": "s1", "current_step": 0, "form_data": {}, "completed": False, "revision": 0}
    client.table.return_value.insert.return_value.execute.return_value = _result([row])

    assert repo.create_conversation("s1") == row
    client.table.assert_called_with("conversations")
    inserted = client.table.return_value.insert.call_args[0][0]
    assert inserted == {"session_id": "s1", "current_step": 0, "form_data": {}, "completed": False, "revision": 0}


def test_get_conversation_by_session_id_found(repo, client):
    query = client.table.return_value.select.return_value.eq.return_value.order.return_value.limit.return_value
    query.execute.return_value = _result([{"id": "conv-1", "session_id": "s1"}])

    assert repo.get_conversation_by_session_id("s1")["id"] == "conv-1"
    client.table.return_value.select.return_value.eq.assert_called_with("session_id", "s1")


def test_get_conversation_by_session_id_missing(repo, client):
    query = client.table.return_value.select.return_value.eq.return_value.order.return_value.limit.return_value
    query.execute.return_value = _result([])

    assert repo.get_conversation_by_session_id("nope") is None


def test_get_conversation_missing(repo, client):
    client.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value = _result([])
    assert repo.get_conversation("conv-x") is None


def test_update_conversation_unconditional(repo, client):
    update = client.table.return_value.update
    update.return_value.eq.return_value.execute.return_value = _result([{"id": "conv-1", "current_step": 3}])

    record = repo.update_conversation("conv-1", {"current_step": 3, "session_id": "ignored"})

    assert record["current_step"] == 3
    update.assert_called_with({"current_step": 3})
    update.return_value.eq.assert_called_with("id", "conv-1")


def test_update_conversation_claims_revision(repo, client):
    update = client.table.return_value.update
    guarded = update.return_value.eq.return_value.eq
    guarded.return_value.execute.return_value = _result([{"id": "conv-1", "revision": 5}])

    record = repo.update_conversation("conv-1", {"completed": True}, expected_revision=4)

    assert record["revision"] == 5
    update.assert_called_with({"completed": True, "revision": 5})
    guarded.assert_called_with("revision", 4)


def test_update_conversation_stale_returns_none(repo, client):
    update = client.table.return_value.update
    update.return_value.eq.return_value.eq.return_value.execute.return_value = _result([])

    assert repo.update_conversation("conv-1", {}, expected_revision=1) is None


# ── Messages ─────────────────────────────────────────────────


def test_save_message(repo, client):
    client.table.return_value.insert.return_value.execute.return_value = _result([{"id": "m1"}])

    repo.save_message("conv-1", "Hello", "ai", 0)

    client.table.assert_called_with("messages")
    client.table.return_value.insert.assert_called_with({
        "conversation_id": "conv-1",
        "message_text": "Hello",
        "sender": "ai",
        "message_order": 0,
    })


def test_get_messages_ordered(repo, client):
    ordered = client.table.return_value.select.return_value.eq.return_value.order
    ordered.return_value.execute.return_value = _result(None)

    assert repo.get_messages_by_conversation_id("conv-1") == []
    ordered.assert_called_with("message_order", desc=False)


def test_count_messages(repo, client):
    select = client.table.return_value.select
    select.return_value.eq.return_value.execute.return_value = _result([], count=4)

    assert repo.count_messages("conv-1") == 4
    select.assert_called_with("id", count="exact")


# ── Form submissions ─────────────────────────────────────────


def test_create_form_submission(repo, client):
    client.table.return_value.insert.return_value.execute.return_value = _result([{"id": "sub-1"}])

    repo.create_form_submission("conv-1", {"county": "Marion"})

    client.table.assert_called_with("form_submissions")
    client.table.return_value.insert.assert_called_with({
        "conversation_id": "conv-1",
        "form_type": "appearance_form",
        "form_data": {"county": "Marion"},
        "pdf_generated": False,
    })


def test_get_form_submission_missing(repo, client):
    query = client.table.return_value.select.return_value.eq.return_value.order.return_value.limit.return_value
    query.execute.return_value = _result([])

    assert repo.get_form_submission_by_conversation_id("conv-1") is None


def test_mark_pdf_generated(repo, client):
    update = client.table.return_value.update
    update.return_value.eq.return_value.execute.return_value = _result([{"id": "sub-1", "pdf_generated": True}])

    assert repo.mark_pdf_generated("conv-1")["pdf_generated"] is True
    update.assert_called_with({"pdf_generated": True})


# ── Failures ─────────────────────────────────────────────────


def test_client_errors_become_storage_errors(repo, client):
    client.table.return_value.insert.return_value.execute.side_effect = RuntimeError("connection refused")

    with pytest.raises(StorageError) as excinfo:
        repo.save_message("conv-1", "Hi", "user", 0)

    assert excinfo.value.operation == "saving message"
    assert isinstance(excinfo.value.cause, RuntimeError)


def test_unconfigured_project_fails_on_first_call():
    repo = ConversationRepository()

    with pytest.raises(PersistenceNotConfiguredError):
        repo.get_conversation_by_session_id("s1")
