"""Static checklist catalog: checklist name -> ordered task descriptions."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

CHECKLIST_CATALOG: dict[str, tuple[str, ...]] = {
    "kitchen checklist": (
        "Check fridge/freezer temperature",
        "Clean all worktops and cutting boards",
        "Refill soap/sanitiser at sinks",
        "Inspect food storage areas",
        "Sweep and mop floor",
    ),
    "sitting area checklist": (
        "Wipe tables and chairs",
        "Check and refill napkins & condiments",
        "Sweep floor and vacuum if needed",
        "Empty rubbish bins",
        "Clean customer touchpoints (door handles, etc.)",
    ),
    "equipment checklist": (
        "Test fryer and grill for proper heating",
        "Check fridge and freezer seals",
        "Ensure extractor fan is functioning",
        "Inspect small appliances (blender, mixer)",
        "Note anything due for maintenance",
    ),
    "cleaning checklist": (
        "Clear and wipe down all prep surfaces",
        "Wash, rinse and sanitise dishes and utensils",
        "Degrease hob, grill and fryer surrounds",
        "Clean toilets and restock paper and soap",
        "Take out rubbish and recycling",
        "Mop all floors",
    ),
}

# Generic phrases that start the general cleaning checklist.
GENERIC_CLEANING_CHECKLIST = "cleaning checklist"
GENERIC_CLEANING_EXACT = ("clean", "start cleaning")


def get_checklist_names() -> list[str]:
    """Return all checklist names in catalog order."""
    return list(CHECKLIST_CATALOG.keys())


def get_tasks(name: str) -> tuple[str, ...]:
    """Return the tasks for a checklist.

    Raises:
        KeyError: If the checklist is not in the catalog.
    """
    return CHECKLIST_CATALOG[name]


def match_checklist(text: str) -> Optional[str]:
    """Match a normalized message to the checklist it starts. Returns None if no match."""
    for name in CHECKLIST_CATALOG:
        if f"start {name}" in text:
            return name
    if text in GENERIC_CLEANING_EXACT or GENERIC_CLEANING_CHECKLIST in text:
        return GENERIC_CLEANING_CHECKLIST
    return None
