from app.constants.sync import TaskAction, TaskStatus, TaskTopic


def test_add_and_find_alive_task(queue):
    task = queue.add_task(TaskTopic.PRODUCTS, TaskAction.CREATE, 10, {"item": {"name": "A"}})

    found = queue.find_alive_task(TaskTopic.PRODUCTS, TaskAction.CREATE, 10)

    assert found.id == task.id
    assert found.status == TaskStatus.PENDING
    assert queue.find_alive_task(TaskTopic.PRODUCTS, TaskAction.UPDATE, 10) is None
    assert queue.find_alive_task(TaskTopic.PRODUCTS, TaskAction.CREATE, 11) is None


def test_delivered_tasks_are_not_alive(queue):
    task = queue.add_task(TaskTopic.PRODUCTS, TaskAction.UPDATE, 10, {})
    queue.mark_task_sent(task.id)

    assert queue.find_alive_task(TaskTopic.PRODUCTS, TaskAction.UPDATE, 10) is None
    assert queue.get_pending_tasks() == []
    assert queue.get_tasks()[0].executed_at is not None


def test_update_task_merges_top_level_keys(queue):
    task = queue.add_task(
        TaskTopic.PRODUCTS, TaskAction.UPDATE, 10,
        {"productId": 10, "variantId": "no-variants", "item": {"name": "A", "price": 1.0}}
    )

    updated = queue.update_task(task.id, {"item": {"name": "B"}})

    assert updated.payload == {"productId": 10, "variantId": "no-variants", "item": {"name": "B"}}
    assert queue.update_task(9999, {"item": {}}) is None


def test_upsert_prefers_pending_create(queue):
    create = queue.add_task(TaskTopic.PRODUCTS, TaskAction.CREATE, 10, {"item": {"name": "A"}})

    task = queue.upsert_update_task(
        TaskTopic.PRODUCTS, 10,
        create_patch=lambda: {"item": {"name": "B", "product_id": "10"}},
        update_payload=lambda: {"productId": 10, "item": {"name": "B"}},
    )

    assert task.id == create.id
    assert task.action == TaskAction.CREATE
    assert task.payload == {"item": {"name": "B", "product_id": "10"}}
    assert len(queue.get_pending_tasks()) == 1


def test_upsert_amends_pending_update_then_creates(queue):
    first = queue.upsert_update_task(
        TaskTopic.PRODUCTS, 21,
        create_patch=lambda: {},
        update_payload=lambda: {"productId": 20, "variantId": 21, "item": {"price": 1.0}},
    )
    second = queue.upsert_update_task(
        TaskTopic.PRODUCTS, 21,
        create_patch=lambda: {},
        update_payload=lambda: {"productId": 20, "variantId": 21, "item": {"price": 2.0}},
    )

    assert first.action == TaskAction.UPDATE
    assert second.id == first.id
    assert second.payload["item"] == {"price": 2.0}


def test_mark_task_failed_counts_retries(queue):
    task = queue.add_task(TaskTopic.PRODUCTS, TaskAction.DELETE, 10, {})

    failed = queue.mark_task_failed(task.id, "search service returned 500")

    assert failed.status == TaskStatus.FAILED
    assert failed.retry_count == 1
    assert failed.error_message == "search service returned 500"
    assert failed.executed_at is not None


def test_queue_statistics_and_filters(queue):
    a = queue.add_task(TaskTopic.PRODUCTS, TaskAction.CREATE, 1, {})
    queue.add_task(TaskTopic.PRODUCTS, TaskAction.UPDATE, 2, {})
    queue.add_task(TaskTopic.PRODUCTS, TaskAction.UPDATE, 3, {})
    queue.mark_task_sent(a.id)

    stats = queue.get_queue_statistics()

    assert stats["total"] == 3
    assert stats["pending"] == 2
    assert stats["sent"] == 1
    assert stats["failed"] == 0
    assert stats["actions"] == {"create": 1, "update": 2}
    assert queue.count_pending() == 2
    assert [t.entity_id for t in queue.get_tasks(action=TaskAction.UPDATE)] == [3, 2]
    assert [t.entity_id for t in queue.get_tasks(entity_id=1)] == [1]
    assert [t.entity_id for t in queue.get_pending_tasks(limit=1)] == [2]
