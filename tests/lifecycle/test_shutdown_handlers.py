"""Tests for button and task shutdown handlers"""

import asyncio

import pytest

from lifecycle.handlers import ButtonShutdownHandler, TaskCancellationHandler
from lifecycle.task_registry import create_tracked_task, TaskCategory


@pytest.mark.asyncio
async def test_button_handler_releases_pins(registry, gpio):
    await registry.init()

    await ButtonShutdownHandler(registry).shutdown()

    assert sorted(gpio.released) == [17, 27]
    assert gpio.cleaned_up


@pytest.mark.asyncio
async def test_button_handler_swallows_teardown_error(registry, gpio):
    await registry.init()
    gpio.fail_release.add(27)

    await ButtonShutdownHandler(registry).shutdown()

    assert gpio.released == [17]


def test_button_handler_runs_first(registry):
    assert ButtonShutdownHandler(registry).shutdown_priority > TaskCancellationHandler().shutdown_priority


@pytest.mark.asyncio
async def test_task_handler_cancels_tracked_tasks():
    async def forever():
        await asyncio.sleep(60)

    task = create_tracked_task(forever(), category=TaskCategory.EVENTBUS, description="slow handler")

    await TaskCancellationHandler().shutdown()

    assert task.cancelled()


@pytest.mark.asyncio
async def test_task_handler_keeps_excluded_tasks():
    async def forever():
        await asyncio.sleep(60)

    keep = create_tracked_task(forever(), category=TaskCategory.EVENTBUS, description="kept handler")

    await TaskCancellationHandler(exclude_tasks=[keep]).shutdown()

    assert not keep.done()
    keep.cancel()
    await asyncio.gather(keep, return_exceptions=True)
