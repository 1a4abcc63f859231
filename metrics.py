from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_correct_chars(target_text: str, typed_text: str) -> int:
    correct = 0
    for i, ch in enumerate(typed_text):
        if i >= len(target_text):
            break
        if ch == target_text[i]:
            correct += 1
    return correct


def count_words(typed_text: str) -> int:
    return len(typed_text.split())


def accuracy(target_text: str, typed_text: str) -> int:
    """Percent of target characters matched at the same position, 0-100."""
    if not target_text or not typed_text:
        return 0
    correct_chars = compute_correct_chars(target_text, typed_text)
    return round_half_up(correct_chars / len(target_text) * 100)


def words_per_minute(typed_text: str, elapsed_s: int) -> int:
    if elapsed_s <= 0:
        return 0
    words = count_words(typed_text)
    return round_half_up(words / elapsed_s * 60)
