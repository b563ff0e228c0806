"""Selection of published authorizations by program phase."""

from typing import Iterable, Protocol, Tuple, TypeVar

from .models import ProgramAction


class Labelled(Protocol):
    @property
    def label(self) -> str:
        ...


LabelledT = TypeVar("LabelledT", bound=Labelled)


def filter_authorizations(
    authorizations: Iterable[LabelledT], action: ProgramAction
) -> Tuple[LabelledT, ...]:
    suffix = action.label_suffix
    return tuple(
        authorization for authorization in authorizations if authorization.label.endswith(suffix)
    )
