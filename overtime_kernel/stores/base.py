"""
Module: overtime_kernel.stores.base
Responsibility: Common base for session-backed stores.

Invariants enforced:
    - Session ownership: stores accept a Session from the caller and never
      create, commit, or roll back their own transactions.  Writes are
      flushed so that later reads in the same unit of work see them.
    - DTO return convention: stores return frozen domain dataclasses, NOT
      ORM model instances.
"""

from abc import ABC

from sqlalchemy.orm import Session


class BaseStore(ABC):
    """
    Abstract base class for all stores.

    Guarantees:
        - session is stored as a public attribute for subclass query use.
        - No commit or rollback operations are performed.
    """

    def __init__(self, session: Session):
        self.session = session
