"""
Recipe snapshot: the displayed view of one dependency-graph node.

A recipe either supports a satisfiability check or it does not. The two
variants are told apart once, at construction time, by matching the engine
object against :class:`~blueprint_console.engine.SatisfiableRecipe`:

- plain recipe       -> ``satisfied is None`` and ``selector is None``
- satisfiable recipe -> ``satisfied`` is a ``bool``; ``selector`` is copied

Display order
-------------
:func:`compare_recipes` puts recipes without a check first, then satisfied
ones, then unsatisfied ones; names break ties. Unsatisfied recipes therefore
end up at the bottom of a container's list.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import cmp_to_key

from blueprint_console.engine import Recipe, SatisfiableRecipe


@dataclass(frozen=True, slots=True)
class RecipeSnapshot:
    """
    Immutable view of a recipe.

    Attributes
    ----------
    name : str
        Recipe identifier, unique inside its container only.
    satisfied : bool | None
        Result of the satisfiability check; ``None`` when the recipe kind has none.
    selector : str | None
        Filter expression locating the external resource; only set alongside
        ``satisfied``.
    """

    name: str
    satisfied: bool | None = None
    selector: str | None = None

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> RecipeSnapshot:
        """Extract the displayed fields from an engine recipe."""
        if isinstance(recipe, SatisfiableRecipe):
            return cls(
                name=recipe.name,
                satisfied=bool(recipe.is_satisfied()),
                selector=recipe.selector,
            )
        return cls(name=recipe.name)

    @property
    def is_unsatisfied(self) -> bool:
        """True only for a satisfiable recipe whose check currently fails."""
        return self.satisfied is False


def _satisfied_rank(satisfied: bool | None) -> int:
    if satisfied is None:
        return 0
    return 1 if satisfied else 2


def compare_recipes(a: RecipeSnapshot, b: RecipeSnapshot) -> int:
    """Three-way comparison: absent check < satisfied < unsatisfied, then name."""
    ra, rb = _satisfied_rank(a.satisfied), _satisfied_rank(b.satisfied)
    if ra != rb:
        return -1 if ra < rb else 1
    if a.name == b.name:
        return 0
    return -1 if a.name < b.name else 1


def order_recipes(recipes: Iterable[RecipeSnapshot]) -> tuple[RecipeSnapshot, ...]:
    """Deduplicate by name (first occurrence wins) and sort for display."""
    unique: dict[str, RecipeSnapshot] = {}
    for recipe in recipes:
        unique.setdefault(recipe.name, recipe)
    return tuple(sorted(unique.values(), key=cmp_to_key(compare_recipes)))


__all__ = ["RecipeSnapshot", "compare_recipes", "order_recipes"]
