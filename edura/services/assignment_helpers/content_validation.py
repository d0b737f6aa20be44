# /edura/services/assignment_helpers/content_validation.py

"""
Authoring validation for assignment content.

`validate_content` never raises for bad input. It collects every field-level
problem it can find and returns them together, keyed the way the editor marks
fields (`question-{id}-statement`, `card-{id}-front`, ...), so the form can
highlight all of them in one pass.

Validation runs in two stages: the pydantic shape check (wrong types, unknown
question type), then the authoring rules for the variant. On success the
ordered parts are re-numbered densely and answer keys are stored in canonical
form.
"""

import json
from typing import Any, Callable, Dict, List, Tuple, Union

from pydantic import BaseModel, ValidationError

from ...core.results import Result
from ...models.assignment_model import (
    OPTION_LETTERS,
    TRUE_FALSE_VALUES,
    AssignmentContent,
    AssignmentType,
    FieldError,
    FlashcardContent,
    QuizContent,
    WrittenContent,
    content_adapter,
)
from .indexing import renumber

# Union tags that pydantic inserts into error locations.
_UNION_TAGS = {"quiz", "written", "flashcard", "simple", "multiple", "truefalse"}

_FIELD_NAMES = {"correctAnswer": "answer"}

_ITEM_PREFIXES = {"questions": "question", "cards": "card"}


# --- Payload Loading ---

def load_payload(payload: Union[str, Dict[str, Any], BaseModel]) -> Tuple[Dict[str, Any], List[FieldError]]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(), []
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError:
            return {}, [FieldError(field="assignmentContent", message="Content is not valid JSON.")]
    if not isinstance(payload, dict):
        return {}, [FieldError(field="assignmentContent", message="Content must be a JSON object.")]
    return dict(payload), []


def _error_key(loc: Tuple, data: Dict[str, Any]) -> str:
    parts = [p for p in loc if p not in _UNION_TAGS]
    if not parts:
        return "assignmentContent"

    head = parts[0]
    if head in _ITEM_PREFIXES and len(parts) > 1 and isinstance(parts[1], int):
        position = parts[1]
        raw_items = data.get(head) or []
        raw = raw_items[position] if position < len(raw_items) else None
        item_id = raw.get("id") if isinstance(raw, dict) and raw.get("id") else f"#{position + 1}"
        rest = parts[2:]
        if not rest:
            field = "type"
        elif rest[0] == "options" and len(rest) > 1:
            field = f"option-{rest[1]}"
        else:
            field = _FIELD_NAMES.get(rest[0], str(rest[0]))
        return f"{_ITEM_PREFIXES[head]}-{item_id}-{field}"

    if head == "attachments" and len(parts) > 2:
        return f"attachment-{parts[1]}-{parts[2]}"

    return "-".join(str(p) for p in parts)


def _shape_errors(error: ValidationError, data: Dict[str, Any]) -> List[FieldError]:
    return [FieldError(field=_error_key(err["loc"], data), message=err["msg"]) for err in error.errors()]


# --- Variant Rules ---

def _validate_quiz(content: QuizContent) -> List[FieldError]:
    errors = []
    if not content.questions:
        errors.append(FieldError(field="questions", message="A quiz needs at least one question."))

    seen_ids = set()
    for question in content.questions:
        key = f"question-{question.id}"
        if question.id in seen_ids:
            errors.append(FieldError(field=f"{key}-id", message="Question ids must be unique."))
        seen_ids.add(question.id)

        if not question.statement.strip():
            errors.append(FieldError(field=f"{key}-statement", message="The question statement is required."))

        answer = question.correctAnswer.strip().lower()
        if question.type == "simple":
            if not answer:
                errors.append(FieldError(field=f"{key}-answer", message="A correct answer is required."))
        elif question.type == "multiple":
            if len(question.options) != len(OPTION_LETTERS):
                errors.append(FieldError(field=f"{key}-options", message="Exactly four options are required."))
            for i, option in enumerate(question.options):
                if not option.strip():
                    errors.append(FieldError(field=f"{key}-option-{i}", message="Options cannot be empty."))
            if answer not in OPTION_LETTERS:
                errors.append(FieldError(field=f"{key}-answer", message="The correct answer must be one of a, b, c or d."))
        elif question.type == "truefalse":
            if answer not in TRUE_FALSE_VALUES:
                errors.append(FieldError(field=f"{key}-answer", message="The correct answer must be true or false."))
    return errors


def _validate_written(content: WrittenContent) -> List[FieldError]:
    errors = []
    if not content.instructions.strip() and not content.attachments:
        errors.append(FieldError(field="instructions", message="Add instructions or at least one attachment."))
    for i, attachment in enumerate(content.attachments):
        if not attachment.name.strip():
            errors.append(FieldError(field=f"attachment-{i}-name", message="Attachment name is required."))
        if not attachment.url.strip():
            errors.append(FieldError(field=f"attachment-{i}-url", message="Attachment URL is required."))
    return errors


def _validate_flashcards(content: FlashcardContent) -> List[FieldError]:
    errors = []
    if not content.cards:
        errors.append(FieldError(field="cards", message="A flashcard set needs at least one card."))

    seen_ids = set()
    for card in content.cards:
        key = f"card-{card.id}"
        if card.id in seen_ids:
            errors.append(FieldError(field=f"{key}-id", message="Card ids must be unique."))
        seen_ids.add(card.id)
        if not card.front.strip():
            errors.append(FieldError(field=f"{key}-front", message="The front of the card is required."))
        if not card.back.strip():
            errors.append(FieldError(field=f"{key}-back", message="The back of the card is required."))
    return errors


_VALIDATORS: Dict[AssignmentType, Callable[[Any], List[FieldError]]] = {
    AssignmentType.QUIZ: _validate_quiz,
    AssignmentType.WRITTEN: _validate_written,
    AssignmentType.FLASHCARD: _validate_flashcards,
}


# --- Normalization ---

def _canonical_answer(question) -> str:
    if question.type in ("multiple", "truefalse"):
        return question.correctAnswer.strip().lower()
    return question.correctAnswer


def _normalize(content):
    if isinstance(content, QuizContent):
        questions = [q.model_copy(update={"correctAnswer": _canonical_answer(q)}) for q in content.questions]
        return content.model_copy(update={"questions": renumber(questions)})
    if isinstance(content, FlashcardContent):
        return content.model_copy(update={"cards": renumber(content.cards)})
    return content


# --- Public API ---

def validate_content(variant: Union[AssignmentType, str], payload: Any) -> Result[AssignmentContent, List[FieldError]]:
    """
    Validates authored content for the given variant.

    Returns a successful Result holding the parsed, re-numbered content, or a
    failed Result holding every FieldError found.
    """
    try:
        variant = AssignmentType(variant)
    except ValueError:
        return Result.failure([FieldError(field="assignmentType", message=f"Unknown assignment type: {variant}")])

    data, errors = load_payload(payload)
    if errors:
        return Result.failure(errors)

    declared = data.setdefault("assignmentType", variant.value)
    if declared != variant.value:
        return Result.failure([FieldError(
            field="assignmentType",
            message=f"Content is tagged '{declared}' but the assignment type is '{variant.value}'.",
        )])

    try:
        content = content_adapter.validate_python(data)
    except ValidationError as e:
        return Result.failure(_shape_errors(e, data))

    errors = _VALIDATORS[variant](content)
    if errors:
        return Result.failure(errors)
    return Result.success(_normalize(content))


def parse_stored_content(stored: Any):
    """
    Parses content read back from the store. Stored content was validated on
    save, so a failure here is a data-integrity fault and is raised.
    """
    if isinstance(stored, str):
        stored = json.loads(stored)
    return content_adapter.validate_python(stored)
