from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from flagwatch.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyOrderUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from tests.helpers.orders import make_order

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyOrderUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started()


def test_commit_persists_orders(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemyOrderUnitOfWork() as uow:
        uow.repositories.orders.upsert(make_order("TX"))
        uow.commit()

    with SqlAlchemyOrderUnitOfWork() as uow:
        assert uow.repositories.orders.get_latest("TX") is not None


def test_uncommitted_work_is_discarded(
    sqlite_unit_of_work: Callable[[], SqlAlchemyOrderUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.orders.upsert(make_order("TX"))

    with pytest.raises(RuntimeError, match="boom"), sqlite_unit_of_work() as uow:
        uow.repositories.orders.upsert(make_order("OH"))
        raise RuntimeError("boom")

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.orders.get_all() == []
