#!/usr/bin/env python3

import sys
from colorama import Fore, Style

VALID_ANSWERS = ("y", "yes", "n", "no", "")
DEFAULT_MAX_ATTEMPTS = 3


def prompt(question: str, suffix: str = "") -> str:
    """Ask a single-line question and return the raw answer"""
    if suffix:
        question = f"{question} {suffix}"
    return input(f"{question} ")


def confirm(
    question: str, default: bool = True, max_attempts: int = DEFAULT_MAX_ATTEMPTS
) -> bool:
    """
    Ask a yes/no question.

    An empty answer picks the default. Invalid answers re-ask up to
    max_attempts times, after which the question counts as declined, as
    does end of input (e.g. stdin closed).
    """
    suffix = f"{Style.DIM}({'Y/n' if default else 'y/N'}){Style.RESET_ALL}"

    for _ in range(max_attempts):
        try:
            answer = prompt(question, suffix).strip().lower()
        except EOFError:
            print()
            return False

        if answer not in VALID_ANSWERS:
            print(f"{Fore.RED}Invalid answer.{Style.RESET_ALL}", file=sys.stderr)
            continue

        if answer == "":
            return default
        return answer.startswith("y")

    print(
        f"{Fore.YELLOW}Too many invalid answers, not continuing.{Style.RESET_ALL}",
        file=sys.stderr,
    )
    return False
