import os

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from .schemas import Problem, Method
from .lp import solve, recommend_method
from .lp.simplex import solve_primal
from .lp.dual import solve_dual
from .lp.parser import parse_problem_spec

mcp = FastMCP("Simplex Trace")


@mcp.tool()
def solve_primal_simplex(problem: Problem) -> dict:
    "Solve an LP with the primal tableau simplex and return every pivot step."
    return solve_primal(problem).model_dump()


@mcp.tool()
def solve_dual_simplex(problem: Problem) -> dict:
    "Solve an LP with the dual tableau simplex and return every pivot step."
    return solve_dual(problem).model_dump()


@mcp.tool()
def solve_linear_program(problem: Problem, method: Method | None = None) -> dict:
    "Solve an LP; without a method, maximization uses primal and minimization uses dual."
    return solve(problem, method).model_dump()


@mcp.tool()
def parse_problem(spec: str) -> dict:
    "Parse a small natural-language LP such as 'maximize 3x1 + 2x2 subject to ...'."
    try:
        problem, names = parse_problem_spec(spec)
    except ValueError as exc:
        return {"error": f"Failed to parse problem: {exc}", "problem": None, "variables": []}
    return {
        "problem": problem.model_dump(),
        "variables": names,
        "variable_map": {f"x{idx + 1}": name for idx, name in enumerate(names)},
        "recommended_method": recommend_method(problem),
    }


if __name__ == "__main__":
    import sys

    transport = os.environ.get("MCP_TRANSPORT", "stdio")

    if transport == "stdio" or "--stdio" in sys.argv:
        mcp.run(transport="stdio")
    else:
        port = int(os.environ.get("PORT", "8081"))
        mcp.settings.host = "0.0.0.0"
        mcp.settings.port = port
        mcp.settings.streamable_http_path = "/mcp"
        mcp.settings.transport_security = TransportSecuritySettings(
            enable_dns_rebinding_protection=False,
            allowed_hosts=["*"],
            allowed_origins=["*"],
        )
        mcp.run(transport="streamable-http")
