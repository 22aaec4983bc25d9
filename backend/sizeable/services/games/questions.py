import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

LOADING_PLACEHOLDER = 'Still loading...'


@dataclass(frozen=True)
class Question:
    cohort: str
    item: str

    @property
    def is_ready(self) -> bool:
        return not (self.cohort == LOADING_PLACEHOLDER and self.item == LOADING_PLACEHOLDER)

    @property
    def prompt(self) -> str:
        return f'{self.item} in {self.cohort}?'

    def to_dict(self):
        return {
            'cohort': self.cohort,
            'item': self.item,
            'prompt': self.prompt,
            'ready': self.is_ready,
        }


NOT_READY = Question(cohort=LOADING_PLACEHOLDER, item=LOADING_PLACEHOLDER)


def clean_entry(raw: str) -> str:
    """Drop the quote characters a CSV export wraps around cells."""
    return raw.replace('"', '')


def parse_pool(text: str) -> List[str]:
    return [line.strip() for line in text.split('\n') if line.strip()]


def draw(cohorts: Sequence[str], items: Sequence[str],
         rng: Optional[random.Random] = None) -> Question:
    """Draw a question from the two pools.

    Either pool being empty (still loading, or its fetch failed) yields
    ``NOT_READY`` rather than an error; callers draw again later.
    """
    if not cohorts or not items:
        return NOT_READY
    rng = rng or random
    cohort = cohorts[rng.randrange(len(cohorts))]
    item = items[rng.randrange(len(items))]
    return Question(cohort=clean_entry(cohort), item=clean_entry(item))
