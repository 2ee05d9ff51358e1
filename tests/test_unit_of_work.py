# tests/test_unit_of_work.py
"""Tests for transaction handling in the unit of work."""

import pytest
from sqlalchemy import select

from nicolas_qui_paie.models import User
from nicolas_qui_paie.repositories.unit_of_work import UnitOfWork, UnitOfWorkError


@pytest.mark.asyncio
async def test_commit_without_begin_raises(db_session) -> None:
    uow = UnitOfWork(db_session)
    with pytest.raises(UnitOfWorkError, match="without begin"):
        await uow.commit()
    assert not uow.active


@pytest.mark.asyncio
async def test_rollback_is_noop_when_inactive(db_session) -> None:
    uow = UnitOfWork(db_session)
    await uow.rollback()
    assert not uow.active


@pytest.mark.asyncio
async def test_commit_twice_raises(db_session) -> None:
    uow = UnitOfWork(db_session)
    await uow.begin()
    await uow.commit()
    with pytest.raises(UnitOfWorkError):
        await uow.commit()


@pytest.mark.asyncio
async def test_begin_adopts_running_transaction(db_session, test_user) -> None:
    # A read autobegins a transaction, as the request authentication does.
    await db_session.execute(select(User).where(User.id == test_user.id))
    assert db_session.in_transaction()

    uow = UnitOfWork(db_session)
    await uow.begin()
    assert uow.active

    await uow.commit()
    assert not uow.active
    assert not db_session.in_transaction()


@pytest.mark.asyncio
async def test_rollback_discards_flushed_changes(db_session, test_user) -> None:
    uow = UnitOfWork(db_session)
    await uow.begin()
    test_user.reputation_score = 77
    await uow.users.update(test_user)
    await uow.flush()
    await uow.rollback()

    await db_session.refresh(test_user)
    assert test_user.reputation_score == 0
