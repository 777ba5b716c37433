"""Cart aggregation for multi-pet bookings."""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Callable, List, Optional

from ...models.domain import CartItem, CartState, Pet, ServiceDefinition, Weight
from ..pricing.resolver import resolve_price

logger = logging.getLogger(__name__)

CartListener = Callable[[CartState], None]


def build_state(items: tuple[CartItem, ...]) -> CartState:
    deposits = [item.service.deposit for item in items if item.service.deposit is not None]
    return CartState(
        items=items,
        total_duration=sum(item.duration_minutes for item in items),
        total_price=sum(item.price for item in items),
        min_deposit=max(deposits) if deposits else 0,
    )


class CartAggregator:
    """Ordered collection of priced items with derived totals.

    Mutations are serialized by a lock and replace the state snapshot as a whole,
    so ``current_state`` never observes a partially applied change. Listeners are
    notified one mutation at a time with the state current at delivery, and a
    failing listener is logged without affecting the mutation or other listeners.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._notify_lock = threading.RLock()
        self._state = CartState()
        self._listeners: List[CartListener] = []

    def current_state(self) -> CartState:
        with self._lock:
            return self._state

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def add_item(self, pet: Pet, service: ServiceDefinition, subject_weight: Weight | None = None) -> Optional[CartItem]:
        """Price ``service`` for ``pet`` and append it. Returns None when the service is out of stock."""

        if service.stock is not None and service.stock <= 0:
            logger.info(f"Rejected {service.service_id} for pet {pet.pet_id}: out of stock")
            return None

        weight = pet.weight if subject_weight is None else subject_weight
        item = CartItem(
            item_id=uuid.uuid4().hex,
            pet=pet,
            service=service,
            price=resolve_price(service.base_price, service.rules, weight),
            duration_minutes=service.duration_minutes,
        )
        self._update(lambda items: items + (item,))
        return item

    def remove_item(self, item_id: str) -> None:
        def without(items: tuple[CartItem, ...]) -> tuple[CartItem, ...]:
            for index, item in enumerate(items):
                if item.item_id == item_id:
                    return items[:index] + items[index + 1 :]
            return items

        self._update(without)

    def clear(self) -> None:
        self._update(lambda items: ())

    def _update(self, change: Callable[[tuple[CartItem, ...]], tuple[CartItem, ...]]) -> None:
        with self._lock:
            self._state = build_state(change(self._state.items))
        self._notify()

    def _notify(self) -> None:
        # Reentrant so a listener may mutate the cart; every delivery reads the latest state.
        with self._notify_lock:
            with self._lock:
                listeners = list(self._listeners)
            for listener in listeners:
                try:
                    listener(self.current_state())
                except Exception:
                    logger.exception(f"Cart listener {listener!r} failed")
