import logging
from typing import Dict, Iterable, List, Tuple

from pydantic import BaseModel, Field

from app.models.message.dto import (
    TAXPAYER_NUMBER_LENGTH,
    AssessmentLineObjection,
    DecisionLineObjection,
    ExtraElement,
    Grievance,
)

logger = logging.getLogger(__name__)

ASSESSMENT_NUMBER = "kenmerkNummerBesluit"
ASSESSMENT_SEQUENCE_NUMBER = "kenmerkVolgNummerBesluit"
TAXPAYER_NUMBER = "belastingplichtnummer"
DECISION_KEY = "beschikkingSleutel"

GRIEVANCE_KIND = "codeGriefSoort"
GRIEVANCE_EXPLANATION = "toelichtingGrief"
GRIEVANCE_CHOICE = "keuzeOmschrijvingGrief"
GRIEVANCE_FIELDS = (GRIEVANCE_KIND, GRIEVANCE_EXPLANATION, GRIEVANCE_CHOICE)

EXPLANATION_SEPARATOR = " - "

# An owner slot is a position in the combined list: taxpayer numbers first, then decision keys.
OwnerSlot = int


def pad_taxpayer_number(taxpayer_number: str) -> str:
    return taxpayer_number.rjust(TAXPAYER_NUMBER_LENGTH, "0")


def build_explanation(choice: str | None, explanation: str | None) -> str:
    return EXPLANATION_SEPARATOR.join(part for part in (choice, explanation) if part)


def strip_sequence(assessment_number: str | None) -> str | None:
    if assessment_number is None:
        return None
    return assessment_number.split("-", 1)[0]


class GroupBuilder:
    """
    Collects grievance fields into groups. The flat extra element list has no explicit group
    delimiters, a new group starts when a field would overwrite a value already set on the
    open group.
    """

    def __init__(self) -> None:
        self.__groups: List[Dict[str, str]] = [{}]

    def feed(self, field_name: str, value: str) -> bool:
        """
        Sets the field on the open group, or opens a new group when the field is already set.
        Returns True when this field is the first field of a group.
        """
        current = self.__groups[-1]
        if field_name in current:
            self.__groups.append({field_name: value})
            return True

        current[field_name] = value
        return len(current) == 1

    @property
    def open_index(self) -> int:
        return len(self.__groups) - 1

    @property
    def groups(self) -> List[Dict[str, str]]:
        return [dict(group) for group in self.__groups]

    def complete_groups(self) -> List[Tuple[int, Dict[str, str]]]:
        """
        Returns (index, group) for every group that carries a grievance kind, in the order the
        groups were opened.
        """
        complete = []
        for index, group in enumerate(self.__groups):
            if GRIEVANCE_KIND not in group:
                if group:
                    logger.warning(
                        f"Dropping grievance group {index} without {GRIEVANCE_KIND}: {sorted(group.keys())}"
                    )
                continue
            complete.append((index, dict(group)))
        return complete


class GroupingResult(BaseModel):
    assessment_number: str | None = None
    assessment_sequence_number: str | None = None
    assessment_line_objections: List[AssessmentLineObjection] = Field(default_factory=list)
    decision_line_objections: List[DecisionLineObjection] = Field(default_factory=list)
    dropped_groups: int = 0


class ExtraElementGrouper:
    """
    Rebuilds the grievances of a bezwaar from the ordered extra elements of a message.

    Grievance groups are assigned to owners, which are the belastingplichtnummers followed by
    the beschikkingSleutels, in declaration order. Groups are matched by position: group ``i``
    belongs to owner ``i``, and groups beyond the last owner are dropped.

    Only when owner declarations and grievances are interleaved and there are more groups
    than owners does each group belong to the owner declared last before the group was opened
    (the first owner for groups opened before any owner), so a taxpayer followed by several
    grievances keeps all of them.
    """

    def group(self, elements: Iterable[ExtraElement]) -> GroupingResult:
        result = GroupingResult()
        builder = GroupBuilder()
        taxpayer_numbers: List[str] = []
        decision_keys: List[str] = []
        # owner declared last when a group was opened, per group index
        owner_in_effect: Dict[int, Tuple[str, int] | None] = {}
        last_owner: Tuple[str, int] | None = None
        group_seen = False
        interleaved = False

        for element in elements:
            name = element.name
            if name == ASSESSMENT_NUMBER:
                if result.assessment_number is None:
                    result.assessment_number = element.value
            elif name == ASSESSMENT_SEQUENCE_NUMBER:
                if result.assessment_sequence_number is None:
                    result.assessment_sequence_number = element.value
            elif name == TAXPAYER_NUMBER:
                taxpayer_numbers.append(element.value)
                last_owner = (TAXPAYER_NUMBER, len(taxpayer_numbers) - 1)
                interleaved = interleaved or group_seen
            elif name == DECISION_KEY:
                decision_keys.append(element.value)
                last_owner = (DECISION_KEY, len(decision_keys) - 1)
                interleaved = interleaved or group_seen
            elif name in GRIEVANCE_FIELDS:
                if builder.feed(name, element.value):
                    owner_in_effect[builder.open_index] = last_owner
                    group_seen = True
            else:
                logger.debug(f"Ignoring unmapped extra element {name}")

        # Interleaving only counts when an owner was declared before some group as well.
        interleaved = interleaved and any(owner is not None for owner in owner_in_effect.values())

        owner_count = len(taxpayer_numbers) + len(decision_keys)
        complete = builder.complete_groups()
        result.dropped_groups = sum(1 for group in builder.groups if group) - len(complete)
        by_owner_in_effect = interleaved and len(complete) > owner_count

        assessment_lines: Dict[str, AssessmentLineObjection] = {}
        decision_lines: Dict[str, DecisionLineObjection] = {}
        for position, (index, group) in enumerate(complete):
            grievance = Grievance(
                kind=group[GRIEVANCE_KIND],
                explanation=build_explanation(
                    group.get(GRIEVANCE_CHOICE), group.get(GRIEVANCE_EXPLANATION)
                ),
            )

            if by_owner_in_effect:
                slot = self.__slot_in_effect(owner_in_effect.get(index), len(taxpayer_numbers))
            else:
                slot = position

            if slot >= owner_count:
                logger.warning(f"Dropping grievance {position} ({grievance.kind}), no owner found")
                result.dropped_groups += 1
                continue

            if slot < len(taxpayer_numbers):
                taxpayer_number = pad_taxpayer_number(taxpayer_numbers[slot])
                if taxpayer_number not in assessment_lines:
                    assessment_lines[taxpayer_number] = AssessmentLineObjection(
                        taxpayer_number=taxpayer_number
                    )
                assessment_lines[taxpayer_number].grievances.append(grievance)
            else:
                decision_key = decision_keys[slot - len(taxpayer_numbers)]
                if decision_key not in decision_lines:
                    decision_lines[decision_key] = DecisionLineObjection(
                        decision_line_key=decision_key
                    )
                decision_lines[decision_key].grievances.append(grievance)

        result.assessment_line_objections = list(assessment_lines.values())
        result.decision_line_objections = list(decision_lines.values())
        result.assessment_number = strip_sequence(result.assessment_number)

        return result

    @staticmethod
    def __slot_in_effect(owner: Tuple[str, int] | None, taxpayer_count: int) -> OwnerSlot:
        if owner is None:
            return 0
        kind, index = owner
        if kind == TAXPAYER_NUMBER:
            return index
        return taxpayer_count + index
