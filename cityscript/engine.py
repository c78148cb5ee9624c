from contextlib import nullcontext
from typing import Iterable, List

from cityscript.errors import script_line_context
from cityscript.ir import Err, ExecutionBatch, ExecutionResult, NormalizedCall, Ok
from cityscript.registry import OperationRegistry


class ExecutionEngine:
    def __init__(self, registry: OperationRegistry):
        self.registry = registry

    def execute(self, calls: Iterable[NormalizedCall]) -> ExecutionBatch:
        """Run calls in order, turning every failure into an ``Err`` result.

        Calls are never reordered or retried, so a later placement can fail
        because earlier ones used up the space it wanted.
        """
        results: List[ExecutionResult] = [self.execute_one(call) for call in calls]
        return ExecutionBatch(
            results=results,
            success_count=sum(1 for result in results if result.ok),
        )

    def execute_one(self, call: NormalizedCall) -> ExecutionResult:
        handler = self.registry.handler(call.operation)
        if handler is None:
            return ExecutionResult(
                call=call,
                outcome=Err(f"Handler not found for operation '{call.operation}'."),
            )
        # Calls made outside a script (source_line 0) carry no line context.
        context = (
            script_line_context(call.source_line, call.original_text)
            if call.source_line > 0
            else nullcontext()
        )
        try:
            with context:
                value = handler(*call.args)
        except Exception as exc:  # noqa: BLE001 - one bad call must not stop the batch
            return ExecutionResult(call=call, outcome=Err(str(exc) or type(exc).__name__))
        return ExecutionResult(call=call, outcome=Ok(value))
