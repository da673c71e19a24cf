import pytest

from core.errors import NotFoundError, PartialFailureError, PersistenceError
from repositories import TaskFolderRepository
from repositories.models import TaskFolderCreate, TaskFolderUpdate
from repositories.paths import folder_path, folders_path, tasks_path

from .fakes import USER_ID, VanishingDocumentStore, seed_folder, seed_task


async def test_list_folders_counts_tasks(store, folder_repository):
    seed_folder(store, "f1", "Work")
    seed_folder(store, "f2", "Home")
    seed_task(store, "f1", "t1", "A", status="Completed")
    seed_task(store, "f1", "t2", "B", status="completed")
    seed_task(store, "f1", "t3", "C", status="In Progress")
    seed_task(store, "f2", "t4", "D")

    folders = {f.id: f for f in await folder_repository.list_folders(USER_ID)}

    assert folders["f1"].total_tasks == 3
    assert folders["f1"].completed_tasks_count == 2
    assert folders["f2"].total_tasks == 1
    assert folders["f2"].completed_tasks_count == 0


async def test_list_folders_empty(folder_repository):
    assert await folder_repository.list_folders(USER_ID) == []


async def test_list_folders_fails_whole_call_when_one_folder_fails(failing_store):
    seed_folder(failing_store, "f1", "Work")
    seed_folder(failing_store, "f2", "Home")
    failing_store.fail_lists.add(tasks_path(USER_ID, "f2"))
    repository = TaskFolderRepository(failing_store)

    with pytest.raises(PartialFailureError) as exc:
        await repository.list_folders(USER_ID)

    assert set(exc.value.failures) == {"f2"}


async def test_create_folder_returns_persisted_document(store, folder_repository):
    created = await folder_repository.create_folder(
        USER_ID, TaskFolderCreate(title="Work", description="Office")
    )

    assert created.id
    assert created.title == "Work"
    assert created.user_id == USER_ID
    assert await store.get(folder_path(USER_ID, created.id)) is not None


async def test_create_folder_detects_lost_write():
    repository = TaskFolderRepository(VanishingDocumentStore())

    with pytest.raises(PersistenceError):
        await repository.create_folder(USER_ID, TaskFolderCreate(title="Work"))


async def test_create_folder_wraps_store_errors(failing_store):
    failing_store.fail_adds = True
    repository = TaskFolderRepository(failing_store)

    with pytest.raises(PersistenceError) as exc:
        await repository.create_folder(USER_ID, TaskFolderCreate(title="Work"))

    assert exc.value.operation == "create_folder"
    assert exc.value.cause is not None


async def test_update_folder_merges_fields(store, folder_repository):
    seed_folder(store, "f1", "Work", description="Office")

    updated = await folder_repository.update_folder(
        USER_ID, "f1", TaskFolderUpdate(title="Work (Q4)")
    )

    assert updated.title == "Work (Q4)"
    assert updated.description == "Office"


async def test_update_missing_folder(folder_repository):
    with pytest.raises(NotFoundError):
        await folder_repository.update_folder(USER_ID, "nope", TaskFolderUpdate(title="X"))


async def test_get_folder(store, folder_repository):
    seed_folder(store, "f1", "Work")

    assert (await folder_repository.get_folder(USER_ID, "f1")).title == "Work"
    assert await folder_repository.get_folder(USER_ID, "nope") is None


async def test_delete_folder_removes_whole_subtree(store, folder_repository):
    seed_folder(store, "f1", "Work")
    seed_folder(store, "f2", "Home")
    seed_task(store, "f1", "t1", "A")
    seed_task(store, "f1", "t2", "B")
    seed_task(store, "f2", "t3", "C")

    removed = await folder_repository.delete_folder(USER_ID, "f1")

    assert removed == 3
    remaining = [p for p in store.documents if p.startswith(folder_path(USER_ID, "f1"))]
    assert remaining == []
    assert len(await store.list(folders_path(USER_ID))) == 1
    assert len(await store.list(tasks_path(USER_ID, "f2"))) == 1


async def test_delete_missing_folder(folder_repository):
    with pytest.raises(NotFoundError):
        await folder_repository.delete_folder(USER_ID, "nope")


async def test_delete_folder_converges_after_interrupted_attempt(failing_store):
    seed_folder(failing_store, "f1", "Work")
    for i in range(4):
        seed_task(failing_store, "f1", f"t{i}", f"Task {i}")
    failing_store.recursive_delete_failures = 1
    failing_store.recursive_delete_partial = 2
    repository = TaskFolderRepository(failing_store, max_retries=3)

    await repository.delete_folder(USER_ID, "f1")

    assert failing_store.recursive_delete_calls == 2
    assert failing_store.documents == {}


async def test_delete_folder_gives_up_after_max_retries(failing_store):
    seed_folder(failing_store, "f1", "Work")
    failing_store.recursive_delete_failures = 5
    repository = TaskFolderRepository(failing_store, max_retries=2)

    with pytest.raises(PersistenceError):
        await repository.delete_folder(USER_ID, "f1")

    assert failing_store.recursive_delete_calls == 2


async def test_list_folders_recomputes_stored_counters(store, folder_repository):
    seed_folder(store, "f1", "Work", total_tasks=99, completed_tasks_count=42)
    seed_task(store, "f1", "t1", "A", status="Completed")

    folders = await folder_repository.list_folders(USER_ID)

    assert folders[0].total_tasks == 1
    assert folders[0].completed_tasks_count == 1


async def test_zero_max_retries_still_attempts_once(failing_store):
    seed_folder(failing_store, "f1", "Work")
    failing_store.recursive_delete_failures = 1
    repository = TaskFolderRepository(failing_store, max_retries=0)

    with pytest.raises(PersistenceError):
        await repository.delete_folder(USER_ID, "f1")

    assert repository.max_retries == 1
    assert failing_store.recursive_delete_calls == 1
