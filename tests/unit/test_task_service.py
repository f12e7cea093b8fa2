"""Unit tests for task_service module."""

import uuid

import pytest

from src.core.errors import TaskNotFoundError, TaskStoreError, TaskValidationError
from src.services import task_service


@pytest.mark.unit
class TestCreateTask:
    """Tests for create_task function."""

    async def test_create_applies_defaults(self, task_store):
        """Test a bare description gets an id, timestamp and default labels."""
        record = await task_service.create_task(store=task_store, payload={"task": "Buy milk"})

        assert uuid.UUID(record["id"])
        assert record["task"] == "Buy milk"
        assert record["status"] == "Not Started"
        assert record["priority"] == "Medium"
        assert record["dueDate"] == ""
        assert record["comments"] == ""
        assert record["createdAt"].endswith("Z")
        assert "updatedAt" not in record

    async def test_create_keeps_provided_fields(self, task_store, sample_task_payload):
        """Test optional fields from the payload are stored."""
        record = await task_service.create_task(store=task_store, payload=sample_task_payload)

        assert record["status"] == "In Progress"
        assert record["priority"] == "High"
        assert record["dueDate"] == "2024-01-01"
        assert record["comments"] == "2% fat"

    async def test_create_persists_record(self, task_store):
        """Test the created record is what the store holds."""
        record = await task_service.create_task(store=task_store, payload={"task": "Buy milk"})

        assert await task_store.get(record["id"]) == record

    async def test_create_assigns_fresh_ids(self, task_store):
        """Test each created task gets a previously unused id."""
        first = await task_service.create_task(store=task_store, payload={"task": "One"})
        second = await task_service.create_task(store=task_store, payload={"task": "Two"})

        assert first["id"] != second["id"]

    @pytest.mark.parametrize("payload", [{}, {"task": ""}, {"task": "   "}, {"task": None}])
    async def test_create_without_description_never_calls_store(self, task_store, payload):
        """Test a missing or blank description is rejected before any store call."""
        with pytest.raises(TaskValidationError, match="Task description is required"):
            await task_service.create_task(store=task_store, payload=payload)

        assert task_store.calls == []

    async def test_create_rejects_unknown_status(self, task_store):
        """Test out-of-range status labels are rejected."""
        with pytest.raises(TaskValidationError, match="status"):
            await task_service.create_task(store=task_store, payload={"task": "x", "status": "Done"})

        assert task_store.calls == []

    async def test_create_rejects_unknown_priority(self, task_store):
        """Test out-of-range priority labels are rejected."""
        with pytest.raises(TaskValidationError, match="priority"):
            await task_service.create_task(store=task_store, payload={"task": "x", "priority": "Urgent"})

    async def test_create_blank_labels_fall_back_to_defaults(self, task_store):
        """Test empty status and priority behave like omitted ones."""
        record = await task_service.create_task(
            store=task_store,
            payload={"task": "x", "status": "", "priority": None, "dueDate": None},
        )

        assert record["status"] == "Not Started"
        assert record["priority"] == "Medium"
        assert record["dueDate"] == ""

    async def test_create_ignores_client_supplied_id(self, task_store):
        """Test the server always generates the id and creation time."""
        record = await task_service.create_task(
            store=task_store,
            payload={"task": "x", "id": "chosen", "createdAt": "1999-01-01T00:00:00.000Z"},
        )

        assert record["id"] != "chosen"
        assert record["createdAt"] != "1999-01-01T00:00:00.000Z"


@pytest.mark.unit
class TestListTasks:
    """Tests for list_tasks function."""

    async def test_list_empty(self, task_store):
        """Test listing an empty table returns an empty list."""
        assert await task_service.list_tasks(store=task_store) == []

    async def test_list_returns_live_records_only(self, task_store):
        """Test deleted tasks no longer appear in the listing."""
        kept = await task_service.create_task(store=task_store, payload={"task": "Keep"})
        dropped = await task_service.create_task(store=task_store, payload={"task": "Drop"})
        await task_service.delete_task(store=task_store, task_id=dropped["id"])

        records = await task_service.list_tasks(store=task_store)

        assert [r["id"] for r in records] == [kept["id"]]


@pytest.mark.unit
class TestGetTask:
    """Tests for get_task function."""

    async def test_get_existing(self, task_store):
        """Test fetching a created task."""
        created = await task_service.create_task(store=task_store, payload={"task": "Buy milk"})

        assert await task_service.get_task(store=task_store, task_id=created["id"]) == created

    async def test_get_unknown_raises(self, task_store):
        """Test fetching an id that was never created."""
        with pytest.raises(TaskNotFoundError):
            await task_service.get_task(store=task_store, task_id="unknown-id")

    async def test_get_deleted_raises(self, task_store):
        """Test fetching a deleted task."""
        created = await task_service.create_task(store=task_store, payload={"task": "Buy milk"})
        await task_service.delete_task(store=task_store, task_id=created["id"])

        with pytest.raises(TaskNotFoundError):
            await task_service.get_task(store=task_store, task_id=created["id"])


@pytest.mark.unit
class TestUpdateTask:
    """Tests for update_task function."""

    async def test_update_replaces_editable_fields(self, task_store):
        """Test the editable fields change and immutable ones do not."""
        created = await task_service.create_task(
            store=task_store, payload={"task": "Buy milk", "comments": "keep me"}
        )

        updated = await task_service.update_task(
            store=task_store,
            task_id=created["id"],
            payload={
                "task": "Buy milk and eggs",
                "status": "In Progress",
                "priority": "High",
                "dueDate": "2024-01-01",
            },
        )

        assert updated["task"] == "Buy milk and eggs"
        assert updated["status"] == "In Progress"
        assert updated["priority"] == "High"
        assert updated["dueDate"] == "2024-01-01"
        assert updated["updatedAt"].endswith("Z")
        assert updated["id"] == created["id"]
        assert updated["createdAt"] == created["createdAt"]
        assert updated["comments"] == "keep me"

    async def test_update_ignores_immutable_fields_in_payload(self, task_store):
        """Test a client echoing back a full record cannot change id or createdAt."""
        created = await task_service.create_task(store=task_store, payload={"task": "Buy milk"})

        updated = await task_service.update_task(
            store=task_store,
            task_id=created["id"],
            payload={**created, "id": "other", "createdAt": "1999-01-01T00:00:00.000Z", "status": "Completed"},
        )

        assert updated["id"] == created["id"]
        assert updated["createdAt"] == created["createdAt"]
        assert updated["status"] == "Completed"

    async def test_update_allows_any_status_transition(self, task_store):
        """Test a completed task can go back to not started."""
        created = await task_service.create_task(store=task_store, payload={"task": "x", "status": "Completed"})

        updated = await task_service.update_task(
            store=task_store, task_id=created["id"], payload={"task": "x", "status": "Not Started"}
        )

        assert updated["status"] == "Not Started"

    async def test_update_missing_id_raises_not_found(self, task_store):
        """Test updating an unknown id does not create a record."""
        with pytest.raises(TaskNotFoundError):
            await task_service.update_task(store=task_store, task_id="missing", payload={"task": "x"})

        assert await task_store.get("missing") is None

    async def test_update_rejects_blank_description(self, task_store):
        """Test an update cannot blank out the description."""
        created = await task_service.create_task(store=task_store, payload={"task": "x"})
        task_store.calls.clear()

        with pytest.raises(TaskValidationError, match="Task description is required"):
            await task_service.update_task(store=task_store, task_id=created["id"], payload={"task": ""})

        assert task_store.calls == []


@pytest.mark.unit
class TestDeleteTask:
    """Tests for delete_task function."""

    async def test_delete_twice_succeeds(self, task_store):
        """Test deleting the same id twice raises nothing."""
        created = await task_service.create_task(store=task_store, payload={"task": "x"})

        await task_service.delete_task(store=task_store, task_id=created["id"])
        await task_service.delete_task(store=task_store, task_id=created["id"])

        assert await task_store.get(created["id"]) is None


@pytest.mark.unit
async def test_store_errors_propagate(task_store):
    """Test store failures surface to the caller unchanged."""
    task_store.fail_with = "network down"

    with pytest.raises(TaskStoreError, match="network down"):
        await task_service.list_tasks(store=task_store)
