#!/usr/bin/env python
# Created by "Thieu" at 17:25, 02/05/2025 ----------%
#       Email: nguyenthieu2102@gmail.com            %
#       Github: https://github.com/thieu1995        %
# --------------------------------------------------%

from xfis.core.variables import KEYWORDS
from xfis.core.rules import Conditions, FuzzyCondition, SingleCondition, HedgeType, OperatorType
from xfis.helpers.errors import RuleParseError

HEDGES = {
    "slightly": HedgeType.SLIGHTLY,
    "somewhat": HedgeType.SOMEWHAT,
    "very": HedgeType.VERY,
    "extremely": HedgeType.EXTREMELY,
}


def tokenize(text):
    """Split rule text into tokens; parentheses are tokens on their own."""
    return text.replace("(", " ( ").replace(")", " ) ").split()


class Token:
    def __init__(self, text, position):
        self.text = text
        self.position = position

    def __eq__(self, other):
        if isinstance(other, str):
            return self.text == other
        return NotImplemented

    def __hash__(self):
        return hash(self.text)


class ConditionToken(Token):
    """A parsed `FuzzyCondition` standing in the token stream at the position of its variable."""

    def __init__(self, condition, position):
        super().__init__(condition.variable.name, position)
        self.condition = condition


class RuleParser:
    """
    Recursive-descent parser for rule text of the form::

        if (<var> is [not] [hedge] <term>) [and|or (...)]... then (<output_var> is <term>)

    Parameters
    ----------
    inputs : list of FuzzyVariable
        Variables allowed in the condition part.
    outputs : list
        Variables allowed in the conclusion (``FuzzyVariable`` for Mamdani, ``SugenoVariable`` for Sugeno).
        Their ``values`` are the terms or functions a conclusion may name.
    """

    def __init__(self, inputs, outputs):
        self.inputs = {var.name: var for var in inputs}
        self.outputs = {var.name: var for var in outputs}
        self.value_names = set()
        for var in list(inputs) + list(outputs):
            self.value_names.update(value.name for value in var.values)

    def parse(self, text, rule):
        """Fill ``rule.condition`` and ``rule.conclusion`` from ``text`` and return the rule."""
        if type(text) is not str or len(text.strip()) == 0:
            raise RuleParseError("Rule text cannot be empty.")
        tokens = [Token(word, pos) for pos, word in enumerate(tokenize(text))]
        for tok in tokens:
            if tok.text not in KEYWORDS and tok.text not in self.inputs and tok.text not in self.outputs \
                    and tok.text not in self.value_names:
                raise RuleParseError("Unknown identifier", tok.text, tok.position)
        if tokens[0].text != "if":
            raise RuleParseError("'if' must be the first identifier", tokens[0].text, 0)
        then_idx = next((idx for idx, tok in enumerate(tokens) if tok.text == "then"), None)
        if then_idx is None:
            raise RuleParseError("'then' identifier not found.")
        if then_idx < 2:
            raise RuleParseError("Condition part of the rule is empty", "then", then_idx)
        if then_idx == len(tokens) - 1:
            raise RuleParseError("Conclusion part of the rule is empty", "then", then_idx)
        rule.condition = self._parse_conditions(tokens[1:then_idx])
        rule.conclusion = self._parse_conclusion(tokens[then_idx + 1:])
        return rule

    @staticmethod
    def _find_value(var, token):
        for value in var.values:
            if value.name == token.text:
                return value
        raise RuleParseError(f"'{token.text}' is not a value of variable '{var.name}'", token.text, token.position)

    def _extract_single_conditions(self, tokens):
        """Replace every ``var is [not] [hedge] term`` run by a `FuzzyCondition`, keep brackets and operators."""
        items = []
        idx = 0
        while idx < len(tokens):
            tok = tokens[idx]
            if tok.text in self.inputs:
                var = self.inputs[tok.text]
                if len(tokens) - idx < 3:
                    raise RuleParseError("Incomplete condition", tok.text, tok.position)
                if tokens[idx + 1].text != "is":
                    raise RuleParseError(f"'is' must follow variable '{tok.text}'", tokens[idx + 1].text, tokens[idx + 1].position)
                cur = idx + 2
                negated = False
                if tokens[cur].text == "not":
                    negated = True
                    cur += 1
                    if cur >= len(tokens):
                        raise RuleParseError("Condition ends after 'not'", "not", tokens[cur - 1].position)
                hedge = HEDGES.get(tokens[cur].text, HedgeType.NONE)
                if hedge != HedgeType.NONE:
                    cur += 1
                    if cur >= len(tokens):
                        raise RuleParseError("Condition ends after hedge", tokens[cur - 1].text, tokens[cur - 1].position)
                term = self._find_value(var, tokens[cur])
                items.append(ConditionToken(FuzzyCondition(var, term, negated, hedge), tok.position))
                idx = cur + 1
            elif tok.text in self.outputs:
                raise RuleParseError("Variable in the condition part must be an input variable", tok.text, tok.position)
            elif tok.text in ("and", "or", "(", ")"):
                items.append(tok)
                idx += 1
            else:
                raise RuleParseError("Unexpected token in the condition part", tok.text, tok.position)
        return items

    @staticmethod
    def _find_closing_bracket(items):
        """Index of the bracket closing ``items[0]`` or -1."""
        depth = 0
        for idx, item in enumerate(items):
            if item == "(":
                depth += 1
            elif item == ")":
                depth -= 1
                if depth == 0:
                    return idx
        return -1

    def _parse_conditions(self, tokens):
        items = self._extract_single_conditions(tokens)
        cond = self._parse_recursive(items)
        if isinstance(cond, Conditions):
            return cond
        return Conditions(conditions=[cond])

    def _parse_recursive(self, items):
        if len(items) == 0:
            raise RuleParseError("Empty condition found.")
        if items[0] == "(" and self._find_closing_bracket(items) == len(items) - 1:
            return self._parse_recursive(items[1:-1])
        if len(items) == 1 and isinstance(items[0], ConditionToken):
            return items[0].condition
        conditions = Conditions()
        op_set = False
        rest = list(items)
        while len(rest) > 0:
            head = rest[0]
            if head == "(":
                close = self._find_closing_bracket(rest)
                if close == -1:
                    raise RuleParseError("Unbalanced brackets", "(", head.position)
                conditions.conditions.append(self._parse_recursive(rest[1:close]))
                rest = rest[close + 1:]
            elif isinstance(head, ConditionToken):
                conditions.conditions.append(head.condition)
                rest = rest[1:]
            else:
                raise RuleParseError("Wrong expression in the condition part", head.text, head.position)
            if len(rest) > 0:
                head = rest[0]
                if head not in ("and", "or"):
                    raise RuleParseError("Expected 'and' or 'or'", head.text, head.position)
                if len(rest) < 2:
                    raise RuleParseError("Condition part ends with an operator", head.text, head.position)
                new_op = OperatorType.AND if head == "and" else OperatorType.OR
                if op_set and conditions.op != new_op:
                    raise RuleParseError("'and' and 'or' cannot be mixed at one nesting level", head.text, head.position)
                conditions.op = new_op
                op_set = True
                rest = rest[1:]
        return conditions

    def _parse_conclusion(self, tokens):
        while len(tokens) >= 2 and tokens[0].text == "(" and tokens[-1].text == ")":
            tokens = tokens[1:-1]
        if len(tokens) != 3:
            tok = tokens[0] if tokens else None
            raise RuleParseError("Conclusion must have the form 'variable is term'",
                                 None if tok is None else tok.text, None if tok is None else tok.position)
        var_tok, is_tok, term_tok = tokens
        if var_tok.text in self.inputs and var_tok.text not in self.outputs:
            raise RuleParseError("Variable in the conclusion must be an output variable", var_tok.text, var_tok.position)
        if var_tok.text not in self.outputs:
            raise RuleParseError("Unknown output variable in the conclusion", var_tok.text, var_tok.position)
        if is_tok.text != "is":
            raise RuleParseError(f"'is' must follow variable '{var_tok.text}'", is_tok.text, is_tok.position)
        var = self.outputs[var_tok.text]
        return SingleCondition(var, self._find_value(var, term_tok), False)
