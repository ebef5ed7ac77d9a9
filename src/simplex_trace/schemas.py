from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from typing import Literal, List, Dict, Optional

ObjectiveType = Literal["max", "min"]
Relation = Literal["<=", "=", ">="]
Method = Literal["primal", "dual"]
Status = Literal["optimal", "infeasible", "unbounded", "iteration_limit"]

_RELATION_ALIASES = {"≤": "<=", "≥": ">=", "==": "="}


class Objective(BaseModel):
    type: ObjectiveType
    coefficients: List[float]


class Constraint(BaseModel):
    coefficients: List[float]
    relation: Relation
    rhs: float

    @field_validator("relation", mode="before")
    @classmethod
    def _normalize_relation(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return _RELATION_ALIASES.get(value, value)
        return value


class Problem(BaseModel):
    objective: Objective
    constraints: List[Constraint] = Field(default_factory=list)

    @property
    def num_variables(self) -> int:
        return len(self.objective.coefficients)

    @property
    def num_constraints(self) -> int:
        return len(self.constraints)


class Iteration(BaseModel):
    """One immutable tableau snapshot in a solve trace."""

    model_config = ConfigDict(frozen=True)

    tableau: List[List[float]]
    basic_variables: List[str]
    non_basic_variables: List[str]
    pivot_row: Optional[int] = None
    pivot_column: Optional[int] = None
    pivot_element: Optional[float] = None
    entering_variable: Optional[str] = None
    leaving_variable: Optional[str] = None
    explanation: str = ""
    is_optimal: bool = False
    is_unbounded: bool = False


class SimplexResult(BaseModel):
    iterations: List[Iteration]
    optimal: bool
    unbounded: bool
    infeasible: bool
    objective_value: Optional[float]
    solution: Dict[str, float]
    dual_solution: Dict[str, float]
    method: Method
    initial_basis_feasible: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> Status:
        if self.optimal:
            return "optimal"
        if self.unbounded:
            return "unbounded"
        if self.infeasible:
            return "infeasible"
        return "iteration_limit"
