from typing import Annotated, Any, NamedTuple, get_args, get_origin

_ANNOTATED_MARKER_MIN_ARGS = 2


class Component(NamedTuple):
    """Name one of several producers bound to the same contract.

    Attach ``Component`` metadata to ``typing.Annotated`` to spell a keyed slot
    as a single contract object. ``Annotated[Db, Component("replica")]``
    addresses the same slot as ``(Db, key="replica")``.

    Examples:
        .. code-block:: python

            from typing import Annotated, TypeAlias


            class Database: ...


            ReplicaDb: TypeAlias = Annotated[Database, Component("replica")]

            registry.register_singleton(ReplicaDb, PostgresReplica)
            replica = registry.resolve(Database, key="replica")

    """

    value: str


def component_key(annotation: Any) -> Component | None:
    """Return the ``Component`` marker of ``Annotated[Base, Component(...)]``, if any."""
    if get_origin(annotation) is not Annotated:
        return None
    annotation_args = get_args(annotation)
    if len(annotation_args) < _ANNOTATED_MARKER_MIN_ARGS:
        return None
    metadata = annotation_args[1:]
    return next(
        (item for item in metadata if isinstance(item, Component)),
        None,
    )


def split_component_contract(annotation: Any) -> tuple[Any, str | None]:
    """Split a component-qualified contract into ``(base contract, key)``.

    Contracts without a ``Component`` marker are returned unchanged with a
    ``None`` key.
    """
    component = component_key(annotation)
    if component is None:
        return annotation, None
    return get_args(annotation)[0], component.value
