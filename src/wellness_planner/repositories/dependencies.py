"""Dependency injection for repository layer."""

from fastapi import Depends
from sqlalchemy.orm import Session

from ..db.database import get_db
from .interfaces import RepositoryContainer
from .sqlalchemy_impl import (
    SQLAlchemyAreaRepository,
    SQLAlchemyGoalRepository,
    SQLAlchemyReflectionRepository,
    SQLAlchemyUnitOfWork,
)


def get_repository_container(
    db: Session = Depends(get_db),
) -> RepositoryContainer:
    """
    Create a repository container with SQLAlchemy implementations.

    All repositories share the request's session, so one transaction covers
    every statement an action issues.
    """
    return RepositoryContainer(
        area_repo=SQLAlchemyAreaRepository(db),
        goal_repo=SQLAlchemyGoalRepository(db),
        reflection_repo=SQLAlchemyReflectionRepository(db),
        unit_of_work=SQLAlchemyUnitOfWork(db),
    )
