from typing import List, Mapping, Sequence

from cityscript.errors import (
    ScriptError,
    ScriptSyntaxError,
    UnknownOperationError,
    script_line_context,
)
from cityscript.ir import (
    Diagnostic,
    DiagnosticKind,
    NormalizedCall,
    OperationSignature,
    ParsedArgs,
    TranspileResult,
)
from cityscript.values import Value, render_value

from .helpers import parse_arguments, split_call, strip_comment


def resolve_arguments(parsed: ParsedArgs, signature: OperationSignature) -> List[Value]:
    """Merge positional and keyword values onto the signature defaults.

    Positional values past the last parameter are dropped and keywords that
    name no parameter are ignored. Value types are not checked here.
    """
    args: List[Value] = list(signature.defaults)
    for index, value in enumerate(parsed.positional):
        if index >= len(args):
            break
        args[index] = value
    for key, value in parsed.keyword.items():
        if key in signature.parameters:
            args[signature.parameters.index(key)] = value
    return args


def render_call(operation: str, args: Sequence[Value], signature: OperationSignature) -> str:
    rendered = ", ".join(
        f"{param}={render_value(value)}" for param, value in zip(signature.parameters, args)
    )
    return f"{operation}({rendered})"


class ScriptTranspiler:
    def __init__(self, signatures: Mapping[str, OperationSignature]):
        """Create a transpiler for the given operation signatures."""
        self.signatures = signatures

    def transpile(self, script: str) -> TranspileResult:
        """Turn script text into normalized calls plus per-line diagnostics.

        A bad line is reported and skipped; later lines are still processed.
        """
        calls: List[NormalizedCall] = []
        diagnostics: List[Diagnostic] = []
        normalized_code: List[str] = []

        for index, raw in enumerate(script.split("\n")):
            line_no = index + 1
            line = strip_comment(raw)
            if not line:
                normalized_code.append("# (empty line)")
                continue

            with script_line_context(line_no, raw):
                try:
                    call = self._transpile_line(line, raw, line_no)
                except ScriptSyntaxError as exc:
                    normalized_code.append(f"# ! cannot parse: {raw.strip()}")
                    diagnostics.append(_diagnostic(exc, DiagnosticKind.SYNTAX))
                    continue
                except UnknownOperationError as exc:
                    normalized_code.append(f"# ! unknown operation: {exc.operation}")
                    diagnostics.append(
                        _diagnostic(exc, DiagnosticKind.UNKNOWN_OPERATION)
                    )
                    continue
                except Exception as exc:  # noqa: BLE001 - one bad line must not stop the script
                    error = ScriptSyntaxError(
                        f'Cannot parse line: "{raw.strip()}" ({str(exc) or type(exc).__name__})'
                    )
                    normalized_code.append(f"# ! cannot parse: {raw.strip()}")
                    diagnostics.append(_diagnostic(error, DiagnosticKind.SYNTAX))
                    continue

            calls.append(call)
            normalized_code.append(
                render_call(call.operation, call.args, self.signatures[call.operation])
            )

        return TranspileResult(
            calls=calls,
            diagnostics=diagnostics,
            normalized_code=normalized_code,
        )

    def _transpile_line(self, line: str, raw: str, line_no: int) -> NormalizedCall:
        raw_call = split_call(line, line_no, raw)
        signature = self.signatures.get(raw_call.head)
        if signature is None:
            raise UnknownOperationError(raw_call.head)
        parsed = parse_arguments(raw_call.args_text)
        return NormalizedCall(
            operation=raw_call.head,
            args=tuple(resolve_arguments(parsed, signature)),
            original_text=raw_call.original_text,
            source_line=line_no,
        )


def _diagnostic(exc: ScriptError, kind: DiagnosticKind) -> Diagnostic:
    return Diagnostic(source_line=exc.line_no, message=exc.message, kind=kind)
