from app.analysis.differ import InformationDiffer
from app.analysis.models import CategoryDiff


class TestDiff:
    def test_reports_additions_per_category(self) -> None:
        bag_a = {"date": ["1/1/2020"]}
        bag_b = {"date": ["1/1/2020", "2/2/2020"], "money": ["$5"]}

        result = InformationDiffer().diff(bag_a, bag_b)

        assert result == {
            "date": CategoryDiff(additions=["2/2/2020"], removals=[]),
            "money": CategoryDiff(additions=["$5"], removals=[]),
        }

    def test_reports_removals(self) -> None:
        result = InformationDiffer().diff({"email": ["a@b.com"]}, {})
        assert result == {"email": CategoryDiff(additions=[], removals=["a@b.com"])}

    def test_identical_bags_have_no_differences(self) -> None:
        bag = {"date": ["1/1/2020"], "money": ["$5"]}
        assert InformationDiffer().diff(bag, dict(bag)) == {}

    def test_empty_bags_have_no_differences(self) -> None:
        assert InformationDiffer().diff({}, {}) == {}

    def test_repeated_values_collapse(self) -> None:
        result = InformationDiffer().diff({"money": ["$5"]}, {"money": ["$6", "$6"]})
        assert result == {"money": CategoryDiff(additions=["$6"], removals=["$5"])}

    def test_value_order_is_preserved(self) -> None:
        result = InformationDiffer().diff({}, {"percentage": ["9%", "1%", "5%"]})
        assert result["percentage"].additions == ["9%", "1%", "5%"]

    def test_categories_of_first_bag_come_first(self) -> None:
        result = InformationDiffer().diff({"phone": ["555-123-4567"]}, {"date": ["1/1/2020"]})
        assert list(result) == ["phone", "date"]
