"""Question catalog for the guided Appearance form interview"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple, Union


class Coercion(str, Enum):
    """How a raw answer becomes a form value"""
    IDENTITY = "identity"
    YES_NO = "yes_no"


def coerce_identity(message: str) -> str:
    """Accept any answer, trimmed. Empty strings are allowed."""
    return message.strip()


def coerce_yes_no(message: str) -> Optional[bool]:
    """
    Parse a yes/no answer

    Returns:
        True or False, or None when the answer is neither
    """
    lower_message = message.lower().strip()
    if "yes" in lower_message or lower_message == "y":
        return True
    if "no" in lower_message or lower_message == "n":
        return False
    return None


@dataclass(frozen=True)
class QuestionSpec:
    """One entry of the catalog"""
    id: str
    prompt: str
    field: str
    coercion: Coercion = Coercion.IDENTITY

    def coerce(self, message: str) -> Optional[Union[str, bool]]:
        """Turn the raw message into a form value, None means rejected"""
        if self.coercion is Coercion.YES_NO:
            return coerce_yes_no(message)
        return coerce_identity(message)


class QuestionCatalog:
    """Immutable ordered sequence of questions"""

    def __init__(self, questions: Iterable[QuestionSpec]):
        self._questions: Tuple[QuestionSpec, ...] = tuple(questions)
        if not self._questions:
            raise ValueError("A catalog needs at least one question")

        ids = [q.id for q in self._questions]
        if len(set(ids)) != len(ids):
            raise ValueError("Question ids must be unique")

        fields = [q.field for q in self._questions]
        if len(set(fields)) != len(fields):
            raise ValueError("Question fields must be unique")

    @property
    def length(self) -> int:
        return len(self._questions)

    def at(self, index: int) -> QuestionSpec:
        if index < 0 or index >= len(self._questions):
            raise IndexError(f"No question at step {index}")
        return self._questions[index]

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(q.field for q in self._questions)

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[QuestionSpec]:
        return iter(self._questions)


APPEARANCE_FORM_CATALOG = QuestionCatalog([
    QuestionSpec(
        id="county",
        prompt="Let's start with the court information. On the papers you received from the court, what County is listed at the very top?",
        field="county",
    ),
    QuestionSpec(
        id="court",
        prompt="And right below the County, what is the name of the Court (e.g., Superior Court, Small Claims Court)?",
        field="court",
    ),
    QuestionSpec(
        id="caseNumber",
        prompt="Great. Now, what is the Case Number? It should be labeled 'Cause No.' or 'Case No.'",
        field="caseNumber",
    ),
    QuestionSpec(
        id="plaintiff",
        prompt="What is the full name of the person or company suing you (the Plaintiff)?",
        field="plaintiff",
    ),
    QuestionSpec(
        id="defendant",
        prompt="And what is your full legal name as the Defendant?",
        field="defendant",
    ),
    QuestionSpec(
        id="agreeToNotify",
        prompt="The court requires you to keep your contact information updated. Do you agree to notify the court if your address or phone number changes? (Please answer 'yes' or 'no')",
        field="agreeToNotify",
        coercion=Coercion.YES_NO,
    ),
    QuestionSpec(
        id="mailingAddress",
        prompt="To make sure the court can contact you, what is your current mailing address? (Include street, city, state, and zip code)",
        field="mailingAddress",
    ),
    QuestionSpec(
        id="phone",
        prompt="What is your best contact phone number?",
        field="phone",
    ),
    QuestionSpec(
        id="email",
        prompt="And what is your email address?",
        field="email",
    ),
])
