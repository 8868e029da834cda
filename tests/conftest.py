# -*- coding: utf-8 -*-
"""Shared fixtures: a scripted grammar validator that records its calls."""

from typing import Callable, Dict, List, Optional

import pytest

from script_parsers import SyntaxDiagnostic


class FakeGrammar:
    """
    Grammar validator stand-in.

    ``responses`` maps statement text to either a list of diagnostics or an
    exception instance to raise.  Anything not listed is valid.
    """

    def __init__(self, responses: Optional[Dict[str, object]] = None):
        self.responses = responses or {}
        self.calls: List[str] = []

    def validate(self, text: str) -> List[SyntaxDiagnostic]:
        self.calls.append(text)
        response = self.responses.get(text, [])
        if isinstance(response, BaseException):
            raise response
        return list(response)  # type: ignore[arg-type]


@pytest.fixture
def fake_grammar() -> FakeGrammar:
    return FakeGrammar()


@pytest.fixture
def make_grammar() -> Callable[..., FakeGrammar]:
    return FakeGrammar
