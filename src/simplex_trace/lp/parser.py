import re
from collections import OrderedDict
from typing import Dict, List, Tuple

from ..schemas import Problem, Objective, Constraint

_TOKEN_SPLIT = re.compile(r";|\band\b", re.IGNORECASE)
_COMPARATOR = re.compile(r"(<=|>=|==|=|≤|≥)")
_MULTI_BOUND = re.compile(
    r"^([A-Za-z_][\w]*(?:\s*,\s*[A-Za-z_][\w]*)*)\s*(>=|≥)\s*0+(?:\.0+)?$"
)
_TERM_PATTERN = re.compile(r"([+-]?\s*\d*\.?\d*)\s*([A-Za-z_][\w]*)")
_NUMBER_PATTERN = re.compile(r"[+-]?\s*\d+(?:\.\d+)?")


def parse_problem_spec(spec: str) -> Tuple[Problem, List[str]]:
    """
    Small rule-based parser for toy specs like:
      "maximize 3x1 + 2x2 subject to 2x1 + x2 <= 18, 2x1 + 3x2 <= 42, x1, x2 >= 0"
    Variables become coefficient positions in order of first appearance; the
    returned name list maps position i to the solver's x{i+1}.
    Non-negativity statements are dropped; the simplex methods assume them.
    """

    if not spec or not spec.strip():
        raise ValueError("Specification is empty.")

    normalized = " ".join(spec.replace("\n", " ").split())
    pieces = re.split(r"subject to|such that|s\.t\.", normalized, flags=re.IGNORECASE)
    objective_part = pieces[0].strip()
    constraints_part = pieces[1].strip() if len(pieces) > 1 else ""

    match = re.match(r"(maximize|minimize|max|min)\s*(.*)", objective_part, flags=re.IGNORECASE)
    if not match:
        raise ValueError("Objective must start with 'maximize' or 'minimize'.")
    sense_word = match.group(1).lower()
    sense = "max" if sense_word.startswith("max") else "min"
    objective_expr_str = match.group(2).strip()
    # "maximize z = 3x1 + 2x2"
    if "=" in objective_expr_str:
        objective_expr_str = objective_expr_str.split("=", 1)[1].strip()
    if not objective_expr_str:
        raise ValueError("Objective expression is missing.")

    objective_terms, _ = _parse_linear_expr(objective_expr_str)
    variable_names = OrderedDict((name, None) for name in objective_terms)

    tokens: List[str] = []
    if constraints_part:
        chunks = [chunk.strip() for chunk in _TOKEN_SPLIT.split(constraints_part) if chunk.strip()]
        for chunk in chunks:
            parts = [part.strip() for part in chunk.split(",") if part.strip()]
            # "x1, x2 >= 0" arrives as several pieces; glue them until a relation shows up
            buffer: List[str] = []
            for part in parts:
                buffer.append(part)
                candidate = ", ".join(buffer)
                if _COMPARATOR.search(candidate):
                    tokens.append(candidate)
                    buffer.clear()
            if buffer:
                raise ValueError(f"Could not parse constraint segment '{', '.join(buffer)}'.")

    rows: List[Tuple[Dict[str, float], str, float]] = []
    for token in tokens:
        if _MULTI_BOUND.match(token):
            continue

        comp_match = _COMPARATOR.search(token)
        if not comp_match:
            raise ValueError(f"Could not parse constraint segment '{token}'.")
        relation = comp_match.group(1)
        lhs_str = token[: comp_match.start()].strip()
        rhs_str = token[comp_match.end() :].strip()
        if not lhs_str or not rhs_str:
            raise ValueError(f"Incomplete constraint expression '{token}'.")
        terms, constant = _parse_linear_expr(lhs_str)
        try:
            rhs_value = float(rhs_str.replace(" ", ""))
        except ValueError as exc:
            raise ValueError(f"Right-hand side '{rhs_str}' is not numeric.") from exc
        rows.append((terms, relation, rhs_value - constant))
        for name in terms:
            variable_names.setdefault(name, None)

    names = list(variable_names.keys())
    objective = Objective(
        type=sense,
        coefficients=[objective_terms.get(name, 0.0) for name in names],
    )
    constraints = [
        Constraint(
            coefficients=[terms.get(name, 0.0) for name in names],
            relation=relation,
            rhs=rhs,
        )
        for terms, relation, rhs in rows
    ]
    return Problem(objective=objective, constraints=constraints), names


def _parse_linear_expr(expr_str: str) -> Tuple["OrderedDict[str, float]", float]:
    expr_clean = expr_str.replace("*", "")
    coeffs: "OrderedDict[str, float]" = OrderedDict()
    spans: List[Tuple[int, int]] = []

    for match in _TERM_PATTERN.finditer(expr_clean):
        coef_text = match.group(1).replace(" ", "")
        var_name = match.group(2)
        if coef_text in ("", "+"):
            coef = 1.0
        elif coef_text == "-":
            coef = -1.0
        else:
            coef = float(coef_text)
        coeffs[var_name] = coeffs.get(var_name, 0.0) + coef
        spans.append(match.span())

    remaining = list(expr_clean)
    for start, end in spans:
        for idx in range(start, end):
            remaining[idx] = " "
    remaining_str = "".join(remaining)

    constant = 0.0
    for num_match in _NUMBER_PATTERN.finditer(remaining_str):
        text = num_match.group(0).replace(" ", "")
        if text:
            constant += float(text)

    return coeffs, constant
