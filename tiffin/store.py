"""
Data Store Module

Repository interfaces for every entity plus the in-memory implementations
the service runs on. Services depend only on the interfaces, so a database
backed implementation can replace the in-memory one without touching them.

Concurrency:
    - Id allocation and uniqueness checks run under a repository lock
    - Orders and OTP challenges expose ``locked(key)``, a per-entity lock
      that serializes read-modify-write sequences on one record

Usage:
    from tiffin.store import get_store

    store = get_store()
    with store.orders.locked(order_id):
        order = store.orders.get(order_id)
        ...

Version: 1.0.0
"""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Hashable, Iterator, List, Optional

from tiffin.core.errors import UserAlreadyExists
from tiffin.models import Dish, Notification, Order, OtpChallenge, Role, User

logger = logging.getLogger(__name__)


class KeyedLocks:
    """
    Lazily created lock per key.

    An entry lives only while some thread holds or waits for it, so
    one-off keys (phone numbers) do not accumulate.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, List[Any]] = {}  # key -> [lock, users]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]


# =============================================================================
# REPOSITORY INTERFACES
# =============================================================================

class UserRepository(ABC):
    """Account storage. Email and phone are unique across all users."""

    @abstractmethod
    def get(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def find_by_phone(self, phone: str) -> Optional[User]:
        pass

    @abstractmethod
    def list(self) -> List[User]:
        pass

    @abstractmethod
    def add(
        self,
        name: Optional[str],
        phone: str,
        role: Role = Role.CUSTOMER,
        email: Optional[str] = None,
        password_hash: Optional[str] = None,
    ) -> User:
        """
        Create a user with the next id.

        Args:
            name: Display name; ``None`` assigns "User <id>"

        Raises:
            UserAlreadyExists: If the email or phone is already taken
        """
        pass

    @abstractmethod
    def toggle_active(self, user_id: int) -> Optional[User]:
        """Flip the active flag; returns None for unknown ids."""
        pass


class DishRepository(ABC):

    @abstractmethod
    def get(self, dish_id: int) -> Optional[Dish]:
        pass

    @abstractmethod
    def list(self) -> List[Dish]:
        """All dishes in insertion order."""
        pass

    @abstractmethod
    def add(self, dish: Dish) -> Dish:
        pass


class OrderRepository(ABC):

    @abstractmethod
    def get(self, order_id: int) -> Optional[Order]:
        pass

    @abstractmethod
    def list(self) -> List[Order]:
        """All orders in id order."""
        pass

    @abstractmethod
    def add(self, **fields: Any) -> Order:
        """Create an order with the next id from the given Order fields."""
        pass

    @abstractmethod
    def locked(self, order_id: int):
        """Context manager serializing updates to one order."""
        pass


class OtpRepository(ABC):

    @abstractmethod
    def get(self, phone: str) -> Optional[OtpChallenge]:
        pass

    @abstractmethod
    def put(self, challenge: OtpChallenge) -> None:
        """Store a challenge, replacing any previous one for the phone."""
        pass

    @abstractmethod
    def delete(self, phone: str) -> None:
        pass

    @abstractmethod
    def locked(self, phone: str):
        """Context manager serializing check-and-consume on one phone."""
        pass


class NotificationRepository(ABC):

    @abstractmethod
    def add(self, **fields: Any) -> Notification:
        pass

    @abstractmethod
    def list(self) -> List[Notification]:
        pass


# =============================================================================
# IN-MEMORY IMPLEMENTATIONS
# =============================================================================

class InMemoryUserRepository(UserRepository):

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        if not email:
            return None
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_phone(self, phone: str) -> Optional[User]:
        if not phone:
            return None
        return next((u for u in self._users.values() if u.phone == phone), None)

    def list(self) -> List[User]:
        return list(self._users.values())

    def add(
        self,
        name: Optional[str],
        phone: str,
        role: Role = Role.CUSTOMER,
        email: Optional[str] = None,
        password_hash: Optional[str] = None,
    ) -> User:
        with self._lock:
            if self.find_by_email(email) or self.find_by_phone(phone):
                raise UserAlreadyExists()
            user_id = next(self._ids)
            user = User(
                id=user_id,
                name=name or f"User {user_id}",
                phone=phone,
                role=role,
                email=email or None,
                password_hash=password_hash,
            )
            self._users[user_id] = user
        logger.debug(f"User #{user.id} stored ({user.role.value})")
        return user

    def toggle_active(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            user.is_active = not user.is_active
            return user


class InMemoryDishRepository(DishRepository):

    def __init__(self):
        self._dishes: Dict[int, Dish] = {}

    def get(self, dish_id: int) -> Optional[Dish]:
        return self._dishes.get(dish_id)

    def list(self) -> List[Dish]:
        return list(self._dishes.values())

    def add(self, dish: Dish) -> Dish:
        self._dishes[dish.id] = dish
        return dish


class InMemoryOrderRepository(OrderRepository):

    def __init__(self):
        self._orders: Dict[int, Order] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._row_locks = KeyedLocks()

    def get(self, order_id: int) -> Optional[Order]:
        return self._orders.get(order_id)

    def list(self) -> List[Order]:
        return list(self._orders.values())

    def add(self, **fields: Any) -> Order:
        with self._lock:
            order = Order(id=next(self._ids), **fields)
            self._orders[order.id] = order
        return order

    def locked(self, order_id: int):
        return self._row_locks.hold(order_id)


class InMemoryOtpRepository(OtpRepository):

    def __init__(self):
        self._challenges: Dict[str, OtpChallenge] = {}
        self._row_locks = KeyedLocks()

    def get(self, phone: str) -> Optional[OtpChallenge]:
        return self._challenges.get(phone)

    def put(self, challenge: OtpChallenge) -> None:
        self._challenges[challenge.phone] = challenge

    def delete(self, phone: str) -> None:
        self._challenges.pop(phone, None)

    def locked(self, phone: str):
        return self._row_locks.hold(phone)


class InMemoryNotificationRepository(NotificationRepository):

    def __init__(self):
        self._notifications: List[Notification] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def add(self, **fields: Any) -> Notification:
        with self._lock:
            notification = Notification(id=next(self._ids), **fields)
            self._notifications.append(notification)
        return notification

    def list(self) -> List[Notification]:
        return list(self._notifications)


# =============================================================================
# AGGREGATE
# =============================================================================

@dataclass
class DataStore:
    """All repositories the services share."""
    users: UserRepository
    dishes: DishRepository
    orders: OrderRepository
    otps: OtpRepository
    notifications: NotificationRepository

    @classmethod
    def in_memory(cls) -> "DataStore":
        return cls(
            users=InMemoryUserRepository(),
            dishes=InMemoryDishRepository(),
            orders=InMemoryOrderRepository(),
            otps=InMemoryOtpRepository(),
            notifications=InMemoryNotificationRepository(),
        )


@lru_cache()
def get_store() -> DataStore:
    """
    Dependency injection for FastAPI routes.

    Returns the process-wide store; cached so every request shares the
    same state.
    """
    logger.info("Data store: using in-memory repositories")
    return DataStore.in_memory()


def reset_store() -> None:
    """Drop the cached store; the next get_store() starts empty."""
    get_store.cache_clear()
    logger.debug("Data store cache cleared")
