from esper import World

from fiveballs.components.selection_state import SelectionState


def get_or_create_selection_state(world: World) -> SelectionState:
    """Return the shared SelectionState component, creating it if absent."""
    existing = list(world.get_component(SelectionState))
    if existing:
        return existing[0][1]
    world.create_entity(SelectionState())
    return list(world.get_component(SelectionState))[0][1]
