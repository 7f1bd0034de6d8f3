"""Pure cart state transitions.

reduce() maps (state, action) to the next CartState without touching storage
or subscribers, so it can be exercised on its own.
"""

from cart_store.actions import Action, AddItem, ClearCart, LoadCart, RemoveItem, UpdateQuantity
from cart_store.models import CartState, LineItem


def reduce(state: CartState, action: Action) -> CartState:
    """Return the state that results from applying action to state."""
    if isinstance(action, AddItem):
        return _add_item(state, action)
    if isinstance(action, RemoveItem):
        return _remove_item(state, action.variant_id)
    if isinstance(action, UpdateQuantity):
        return _update_quantity(state, action)
    if isinstance(action, ClearCart):
        return CartState.empty()
    if isinstance(action, LoadCart):
        return CartState(items=action.items)
    raise TypeError(f"Unknown cart action: {type(action).__name__}")


def _add_item(state: CartState, action: AddItem) -> CartState:
    if action.quantity < 1:
        return state

    variant_id = action.item.variant_id
    existing = state.find(variant_id)

    if existing is None:
        new_item = LineItem.from_variant(action.item, action.quantity)
        return CartState(items=state.items + (new_item,))

    # Keep the snapshot taken at first add; only the quantity moves.
    updated = existing.model_copy(update={"quantity": existing.quantity + action.quantity})
    return CartState(items=tuple(updated if item.variant_id == variant_id else item for item in state.items))


def _remove_item(state: CartState, variant_id: int) -> CartState:
    if state.find(variant_id) is None:
        return state
    return CartState(items=tuple(item for item in state.items if item.variant_id != variant_id))


def _update_quantity(state: CartState, action: UpdateQuantity) -> CartState:
    if action.quantity <= 0:
        return _remove_item(state, action.variant_id)

    existing = state.find(action.variant_id)
    if existing is None:
        return state

    updated = existing.model_copy(update={"quantity": action.quantity})
    return CartState(items=tuple(updated if item.variant_id == action.variant_id else item for item in state.items))
