"""ChecklistGate — intake inspection normalization.

Physical items can always be assessed by looking at the device. Functional
items need the device unlocked; without an unlock pattern they are forced to
"sc" (not checked). Overridden values are normalized silently.
"""

from collections.abc import Mapping

from src.rs_common.enums import ChecklistGroup, ChecklistItem, ChecklistValue

CHECKLIST_GROUPS: dict[ChecklistItem, ChecklistGroup] = {
    ChecklistItem.CASING_MARKS: ChecklistGroup.PHYSICAL,
    ChecklistItem.SCREEN_GLASS: ChecklistGroup.PHYSICAL,
    ChecklistItem.FRAME: ChecklistGroup.PHYSICAL,
    ChecklistItem.BENT_DEVICE: ChecklistGroup.PHYSICAL,
    ChecklistItem.BACK_COVER: ChecklistGroup.PHYSICAL,
    ChecklistItem.CAMERA_LENS: ChecklistGroup.PHYSICAL,
    ChecklistItem.CHARGING_PORT: ChecklistGroup.PHYSICAL,
    ChecklistItem.MOISTURE: ChecklistGroup.PHYSICAL,
    ChecklistItem.POWERS_ON: ChecklistGroup.PHYSICAL,
    ChecklistItem.TOUCH: ChecklistGroup.FUNCTIONAL,
    ChecklistItem.DISPLAY: ChecklistGroup.FUNCTIONAL,
    ChecklistItem.BUTTONS: ChecklistGroup.FUNCTIONAL,
    ChecklistItem.REAR_CAMERA: ChecklistGroup.FUNCTIONAL,
    ChecklistItem.FRONT_CAMERA: ChecklistGroup.FUNCTIONAL,
    ChecklistItem.VIBRATOR: ChecklistGroup.FUNCTIONAL,
    ChecklistItem.MICROPHONE: ChecklistGroup.FUNCTIONAL,
    ChecklistItem.EARPIECE: ChecklistGroup.FUNCTIONAL,
    ChecklistItem.SPEAKER: ChecklistGroup.FUNCTIONAL,
    ChecklistItem.FINGERPRINT: ChecklistGroup.FUNCTIONAL,
    ChecklistItem.SIGNAL: ChecklistGroup.FUNCTIONAL,
    ChecklistItem.WIFI_BLUETOOTH: ChecklistGroup.FUNCTIONAL,
}

# Printed labels, in display order.
CHECKLIST_LABELS: dict[ChecklistItem, str] = {
    ChecklistItem.CASING_MARKS: "Golpes / marcas",
    ChecklistItem.SCREEN_GLASS: "Cristal",
    ChecklistItem.FRAME: "Marco",
    ChecklistItem.BENT_DEVICE: "Equipo doblado",
    ChecklistItem.BACK_COVER: "Tapa trasera",
    ChecklistItem.CAMERA_LENS: "Lente de cámara",
    ChecklistItem.CHARGING_PORT: "Pin de carga",
    ChecklistItem.MOISTURE: "Humedad",
    ChecklistItem.POWERS_ON: "Enciende",
    ChecklistItem.TOUCH: "Táctil",
    ChecklistItem.DISPLAY: "Imagen",
    ChecklistItem.BUTTONS: "Botones",
    ChecklistItem.REAR_CAMERA: "Cámara trasera",
    ChecklistItem.FRONT_CAMERA: "Cámara delantera",
    ChecklistItem.VIBRATOR: "Vibrador",
    ChecklistItem.MICROPHONE: "Micrófono",
    ChecklistItem.EARPIECE: "Auricular",
    ChecklistItem.SPEAKER: "Parlante",
    ChecklistItem.FINGERPRINT: "Sensor de huella",
    ChecklistItem.SIGNAL: "Señal",
    ChecklistItem.WIFI_BLUETOOTH: "WiFi / Bluetooth",
}


def group_of(item: ChecklistItem) -> ChecklistGroup:
    return CHECKLIST_GROUPS[item]


def items_in_group(group: ChecklistGroup) -> list[ChecklistItem]:
    return [item for item in ChecklistItem if CHECKLIST_GROUPS[item] is group]


def normalize_checklist(
    proposed: Mapping[ChecklistItem, ChecklistValue] | None,
    unlock_pattern_provided: bool,
) -> dict[ChecklistItem, ChecklistValue]:
    """Return a full mapping covering every ChecklistItem.

    Missing items become UNCHECKED. When the device could not be unlocked every
    FUNCTIONAL item is forced to UNCHECKED whatever the caller sent.
    """
    proposed = proposed or {}
    normalized: dict[ChecklistItem, ChecklistValue] = {}
    for item in ChecklistItem:
        value = proposed.get(item, ChecklistValue.UNCHECKED)
        if not unlock_pattern_provided and CHECKLIST_GROUPS[item] is ChecklistGroup.FUNCTIONAL:
            value = ChecklistValue.UNCHECKED
        normalized[item] = value
    return normalized


def is_checklist_consistent(
    checklist: Mapping[ChecklistItem, ChecklistValue],
    unlock_pattern_provided: bool,
) -> bool:
    """True when no functional item holds si/no on a locked device."""
    if unlock_pattern_provided:
        return True
    return all(
        checklist.get(item, ChecklistValue.UNCHECKED) == ChecklistValue.UNCHECKED
        for item in items_in_group(ChecklistGroup.FUNCTIONAL)
    )
