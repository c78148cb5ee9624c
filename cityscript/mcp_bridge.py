"""FastMCP bridge exposing a :class:`CitySession` as callable tools."""

from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, Optional, Type

from cityscript.exporter import report_to_dict, result_to_dict, session_to_dict
from cityscript.ir import OperationSignature
from cityscript.session import CitySession
from cityscript.values import render_value


def build_fastmcp_server(
    session: CitySession,
    *,
    server_name: str = "CityScript",
    mcp_cls: Optional[Type[Any]] = None,
) -> Any:
    """Create a FastMCP server whose tools drive ``session``.

    Registers ``run_script``, ``get_state`` and one tool per registered
    operation. Operation tools take keyword arguments named after the
    operation parameters.

    Parameters
    ----------
    session:
        Session whose grid the tools mutate.
    server_name:
        Name passed to FastMCP constructor.
    mcp_cls:
        Optional FastMCP-compatible class override (useful for tests).

    Returns:
        Configured MCP server instance.

    Raises:
        RuntimeError: If ``fastmcp`` is unavailable or registration API is unsupported.

    Example:
        >>> mcp = build_fastmcp_server(CitySession())
    """

    if mcp_cls is None:
        try:
            from fastmcp import FastMCP  # type: ignore
        except ImportError as exc:  # pragma: no cover - depends on optional dependency
            raise RuntimeError(
                "fastmcp is not installed. Install it or pass mcp_cls explicitly."
            ) from exc
        mcp_cls = FastMCP

    mcp = mcp_cls(server_name)

    def run_script(script: str) -> Dict[str, Any]:
        return report_to_dict(session.run(script))

    def get_state() -> Dict[str, Any]:
        return session_to_dict(session)

    _register(mcp, run_script, "run_script", "Run a city script, one call per line.")
    _register(mcp, get_state, "get_state", "Return the grid mask, reservations and placements.")

    for name, signature in session.registry.signatures.items():
        proxy_fn = _make_operation_proxy(session, signature)
        _register(mcp, proxy_fn, name, _describe(signature))

    return mcp


def _register(mcp: Any, fn: Callable[..., Any], tool_name: str, tool_description: str) -> None:
    if hasattr(mcp, "tool"):
        decorator = _get_tool_decorator(
            mcp,
            tool_name=tool_name,
            tool_description=tool_description,
        )
        decorator(fn)
        return

    if hasattr(mcp, "add_tool"):
        mcp.add_tool(fn, name=tool_name, description=tool_description)
        return

    raise RuntimeError(
        "Provided MCP class does not expose a supported registration API "
        "(expected .tool(...) or .add_tool(...))."
    )


def _make_operation_proxy(
    session: CitySession,
    signature: OperationSignature,
) -> Callable[..., Dict[str, Any]]:
    operation = signature.name

    def _operation_proxy(**kwargs: Any) -> Dict[str, Any]:
        return result_to_dict(session.call(operation, **kwargs))

    # MCP servers read parameters from the signature and reject **kwargs.
    _operation_proxy.__signature__ = inspect.Signature(
        [
            inspect.Parameter(
                param,
                inspect.Parameter.KEYWORD_ONLY,
                default=default,
                annotation=Any,
            )
            for param, default in zip(signature.parameters, signature.defaults)
        ],
        return_annotation=Dict[str, Any],
    )
    _operation_proxy.__name__ = _sanitize_identifier(f"tool_{operation}")
    _operation_proxy.__doc__ = _describe(signature)
    return _operation_proxy


def _describe(signature: OperationSignature) -> str:
    params = ", ".join(
        f"{param}={render_value(default)}"
        for param, default in zip(signature.parameters, signature.defaults)
    )
    return f"{signature.name}({params})"


def _get_tool_decorator(mcp: Any, *, tool_name: str, tool_description: str):
    try:
        return mcp.tool(name=tool_name, description=tool_description)
    except TypeError:
        return mcp.tool()


def _sanitize_identifier(value: str) -> str:
    out = []
    for ch in value:
        if ch.isalnum() or ch == "_":
            out.append(ch)
        else:
            out.append("_")
    normalized = "".join(out)
    if not normalized:
        return "tool_proxy"
    if normalized[0].isdigit():
        return f"tool_{normalized}"
    return normalized
