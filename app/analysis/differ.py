from app.analysis.models import CategoryDiff, EntityBag


class InformationDiffer:
    """Reports per-category entity additions and removals between two bags."""

    def diff(self, bag_a: EntityBag, bag_b: EntityBag) -> dict[str, CategoryDiff]:
        """Compare *bag_a* (first document) against *bag_b* (second document).

        Additions are values only in B, removals are values only in A. Value
        equality decides membership and repeated values collapse. Categories
        with neither additions nor removals are left out.
        """
        differences: dict[str, CategoryDiff] = {}
        for category in dict.fromkeys([*bag_a, *bag_b]):
            values_a = bag_a.get(category, [])
            values_b = bag_b.get(category, [])
            additions = self._difference(values_b, values_a)
            removals = self._difference(values_a, values_b)
            if additions or removals:
                differences[category] = CategoryDiff(additions=additions, removals=removals)
        return differences

    @staticmethod
    def _difference(values: list[str], other: list[str]) -> list[str]:
        excluded = set(other)
        return [v for v in dict.fromkeys(values) if v not in excluded]
