"""Unit tests for the intake checklist gate."""

from src.rs_common.enums import ChecklistGroup, ChecklistItem, ChecklistValue
from src.rs_order.domain.checklist import (
    CHECKLIST_LABELS,
    group_of,
    is_checklist_consistent,
    items_in_group,
    normalize_checklist,
)


class TestGroups:
    def test_nine_physical_twelve_functional(self) -> None:
        assert len(items_in_group(ChecklistGroup.PHYSICAL)) == 9
        assert len(items_in_group(ChecklistGroup.FUNCTIONAL)) == 12

    def test_charging_port_is_physical(self) -> None:
        assert group_of(ChecklistItem.CHARGING_PORT) is ChecklistGroup.PHYSICAL

    def test_touch_is_functional(self) -> None:
        assert group_of(ChecklistItem.TOUCH) is ChecklistGroup.FUNCTIONAL

    def test_every_item_has_a_label(self) -> None:
        assert set(CHECKLIST_LABELS) == set(ChecklistItem)


class TestNormalizeChecklist:
    def test_locked_device_forces_functional_to_unchecked(self) -> None:
        result = normalize_checklist(
            {
                ChecklistItem.CHARGING_PORT: ChecklistValue.YES,
                ChecklistItem.TOUCH: ChecklistValue.YES,
            },
            unlock_pattern_provided=False,
        )
        assert result[ChecklistItem.CHARGING_PORT] == ChecklistValue.YES
        assert result[ChecklistItem.TOUCH] == ChecklistValue.UNCHECKED

    def test_unlocked_device_keeps_functional_values(self) -> None:
        result = normalize_checklist(
            {ChecklistItem.TOUCH: ChecklistValue.NO}, unlock_pattern_provided=True
        )
        assert result[ChecklistItem.TOUCH] == ChecklistValue.NO

    def test_missing_items_default_to_unchecked(self) -> None:
        result = normalize_checklist({}, unlock_pattern_provided=True)
        assert len(result) == len(ChecklistItem)
        assert set(result.values()) == {ChecklistValue.UNCHECKED}

    def test_none_input(self) -> None:
        result = normalize_checklist(None, unlock_pattern_provided=False)
        assert len(result) == 21

    def test_idempotent(self) -> None:
        once = normalize_checklist(
            {ChecklistItem.SIGNAL: ChecklistValue.YES, ChecklistItem.FRAME: ChecklistValue.NO},
            unlock_pattern_provided=False,
        )
        assert normalize_checklist(once, unlock_pattern_provided=False) == once

    def test_output_is_always_consistent(self) -> None:
        proposed = {item: ChecklistValue.YES for item in ChecklistItem}
        for unlocked in (True, False):
            result = normalize_checklist(proposed, unlocked)
            assert is_checklist_consistent(result, unlocked)


class TestIsChecklistConsistent:
    def test_functional_value_on_locked_device(self) -> None:
        assert not is_checklist_consistent(
            {ChecklistItem.TOUCH: ChecklistValue.YES}, unlock_pattern_provided=False
        )

    def test_physical_value_on_locked_device(self) -> None:
        assert is_checklist_consistent(
            {ChecklistItem.MOISTURE: ChecklistValue.YES}, unlock_pattern_provided=False
        )
