"""
Parser for the ?[...] interactive-control syntax

Recognizes buttons and text-input placeholders embedded in Markdown prose
and converts them into ParsedInteraction descriptors.

Grammars, in match-priority order (SEP is '|' or the fullwidth '｜'):

    ?[%{{ name }} label SEP label SEP ... placeholder]   buttons with placeholder
    ?[%{{ name }} ... placeholder]                       placeholder only
    ?[%{{ name }} label SEP label (SEP label)*]          buttons only
    ?[%{{ name }} label]                                 single button

plus the bare form ?[label], a button that binds no variable.

A label may carry the value it sends as label//value.

Matching is stateless: each call resolves at most one tag, the leftmost one.
Callers re-invoke on the trailing text to find further tags.

Example:
    >>> match = interaction_parse("Pick: ?[%{{ color }} Red | Blue]")
    >>> match.interaction.variable_name
    'color'
    >>> match.interaction.button_texts
    ['Red', 'Blue']
"""

import re
from typing import Iterator, List, Optional, Pattern, Tuple

from ..models.interaction import InteractionMatch, ParsedInteraction, SyntaxVariant
from .log import LOG


SEPARATOR = r"[|｜]"
_LABEL = r"[^\]|｜]+"
_HEAD = r"\?\[%\{\{\s*(\w+)\s*\}\}\s*"

VALUE_SEPARATOR = "//"


class InteractionParser:
    """
    Ordered matcher for the interactive-tag grammars

    Rules are (pattern, variant) pairs evaluated in fixed priority order.
    The leftmost match across all rules wins; on equal start offsets the
    rule listed first wins.
    """

    rules: List[Tuple[Pattern[str], SyntaxVariant]] = [
        (
            re.compile(
                _HEAD
                + rf"({_LABEL}(?:\s*{SEPARATOR}\s*{_LABEL})*)"
                + rf"\s*{SEPARATOR}\s*\.\.\.\s*([^\]]+)\]"
            ),
            SyntaxVariant.BUTTONS_WITH_PLACEHOLDER,
        ),
        (
            re.compile(_HEAD + r"\.\.\.\s*([^\]]+)\]"),
            SyntaxVariant.PLACEHOLDER_ONLY,
        ),
        (
            re.compile(_HEAD + rf"({_LABEL}(?:\s*{SEPARATOR}\s*{_LABEL})+)\s*\]"),
            SyntaxVariant.BUTTONS_ONLY,
        ),
        (
            re.compile(_HEAD + rf"({_LABEL})\s*\]"),
            SyntaxVariant.SINGLE_BUTTON,
        ),
    ]

    bare_rule: Pattern[str] = re.compile(r"\?\[(?!%\{\{)([^\]]+)\]")

    def parse(self, text: str) -> Optional[InteractionMatch]:
        """
        Resolve the leftmost variable-binding tag in text

        Candidates that match a pattern but fail the structural checks are
        skipped silently and the search resumes one character further on.

        Args:
            text: Text to search

        Returns:
            InteractionMatch for the winning tag, or None if there is none
        """
        return self.match_find(text, include_bare=False)

    def button_parse(self, text: str) -> Optional[InteractionMatch]:
        """
        Resolve the leftmost bare ?[label] button in text

        Example:
            >>> InteractionParser().button_parse("?[Continue]").interaction.button_texts
            ['Continue']
        """
        pos = 0
        while pos <= len(text):
            found = self.bare_rule.search(text, pos)
            if not found:
                return None
            interaction = self.interaction_build(SyntaxVariant.BARE_BUTTON, found)
            if interaction is not None:
                return self.match_make(SyntaxVariant.BARE_BUTTON, found, interaction)
            pos = found.start() + 1
        return None

    def match_find(self, text: str, include_bare: bool = True) -> Optional[InteractionMatch]:
        """
        Resolve the leftmost tag of any grammar

        Args:
            text: Text to search
            include_bare: Also consider the bare ?[label] form, which ranks
                          after the four variable-binding grammars

        Returns:
            InteractionMatch, or None when text holds no well-formed tag
        """
        rules = list(self.rules)
        if include_bare:
            rules.append((self.bare_rule, SyntaxVariant.BARE_BUTTON))

        pos = 0
        while pos <= len(text):
            candidates = []
            for priority, (pattern, variant) in enumerate(rules):
                found = pattern.search(text, pos)
                if found:
                    candidates.append((found.start(), priority, variant, found))
            if not candidates:
                return None

            leftmost, _priority, variant, found = min(
                candidates, key=lambda candidate: (candidate[0], candidate[1])
            )
            interaction = self.interaction_build(variant, found)
            if interaction is not None:
                return self.match_make(variant, found, interaction)

            LOG(f"Malformed interactive tag at offset {leftmost}, left as text", level=3)
            pos = leftmost + 1
        return None

    def matches_iter(self, text: str, include_bare: bool = True) -> Iterator[InteractionMatch]:
        """
        Yield every tag in text, left to right

        Offsets of the yielded matches are relative to text.
        """
        offset = 0
        while offset < len(text):
            match = self.match_find(text[offset:], include_bare=include_bare)
            if match is None:
                return
            yield InteractionMatch(
                variant=match.variant,
                start=match.start + offset,
                end=match.end + offset,
                raw=match.raw,
                interaction=match.interaction,
            )
            offset += match.end

    def interaction_build(
        self, variant: SyntaxVariant, found: "re.Match[str]"
    ) -> Optional[ParsedInteraction]:
        """
        Turn a regex match into a ParsedInteraction

        Returns:
            The descriptor, or None when the candidate is structurally empty
            (no variable name, or neither a button nor a placeholder)
        """
        if variant is SyntaxVariant.BARE_BUTTON:
            variable_name = ""
            labels, placeholder = found.group(1), None
        else:
            variable_name = found.group(1).strip()
            if not variable_name:
                return None
            if variant is SyntaxVariant.PLACEHOLDER_ONLY:
                labels, placeholder = "", found.group(2)
            elif variant is SyntaxVariant.BUTTONS_WITH_PLACEHOLDER:
                labels, placeholder = found.group(2), found.group(3)
            else:
                labels, placeholder = found.group(2), None

        button_texts, button_values = self.labels_split(labels)
        if placeholder is not None:
            placeholder = placeholder.strip() or None

        if not button_texts and placeholder is None:
            return None

        return ParsedInteraction(
            variable_name=variable_name,
            button_texts=button_texts,
            button_values=button_values,
            placeholder=placeholder,
        )

    def labels_split(self, labels: str) -> Tuple[List[str], Optional[List[str]]]:
        """
        Split a SEP-delimited label list

        Each label is trimmed and empty labels are dropped. A label written
        as text//value contributes text to the labels and value to the
        values; the values list is returned only when some label had one.

        Example:
            >>> InteractionParser().labels_split(" Yes//y ｜ No | ")
            (['Yes', 'No'], ['y', 'No'])
        """
        texts: List[str] = []
        values: List[str] = []
        explicit = False
        for label in re.split(SEPARATOR, labels):
            text, sep, value = label.partition(VALUE_SEPARATOR)
            text = text.strip()
            if not text:
                continue
            texts.append(text)
            if sep:
                explicit = True
                values.append(value.strip() or text)
            else:
                values.append(text)
        return texts, (values if explicit else None)

    def match_make(
        self, variant: SyntaxVariant, found: "re.Match[str]", interaction: ParsedInteraction
    ) -> InteractionMatch:
        return InteractionMatch(
            variant=variant,
            start=found.start(),
            end=found.end(),
            raw=found.group(0),
            interaction=interaction,
        )


_parser = InteractionParser()


def interaction_parse(text: str) -> Optional[InteractionMatch]:
    """Leftmost variable-binding tag in text, or None"""
    return _parser.parse(text)


def button_parse(text: str) -> Optional[InteractionMatch]:
    """Leftmost bare ?[label] button in text, or None"""
    return _parser.button_parse(text)


def interaction_find(text: str, include_bare: bool = True) -> Optional[InteractionMatch]:
    """Leftmost tag of any grammar in text, or None"""
    return _parser.match_find(text, include_bare=include_bare)


def interactions_findAll(text: str, include_bare: bool = True) -> List[InteractionMatch]:
    """Every tag in text, left to right"""
    return list(_parser.matches_iter(text, include_bare=include_bare))


def variables_list(text: str) -> List[str]:
    """
    Distinct variable names bound by the tags in text, in first-seen order

    Example:
        >>> variables_list("?[%{{a}} x] ?[%{{b}} ...y] ?[%{{a}} z]")
        ['a', 'b']
    """
    names: List[str] = []
    for match in _parser.matches_iter(text, include_bare=False):
        name = match.interaction.variable_name
        if name not in names:
            names.append(name)
    return names
