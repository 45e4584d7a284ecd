"""An alerter guarded by a circuit breaker for each job."""

from __future__ import annotations

import threading

from cronwatch.monitor.base import AlertDeliveryError, Alerter
from cronwatch.watcher.circuit import Circuit
from cronwatch.watcher.event import Event


class CircuitOpenError(AlertDeliveryError):
    """Raised when an alert is suppressed because the job's circuit is open."""

    def __init__(self, job_name: str) -> None:
        super().__init__(f'circuit open for job "{job_name}": alert suppressed')
        self.job_name = job_name


class CircuitAlerter(Alerter):
    """Wraps ``inner`` so repeated delivery failures do not cause an alert storm.

    ``template`` supplies the parameters; each job gets its own circuit.
    """

    def __init__(self, inner: Alerter, template: Circuit) -> None:
        self.inner = inner
        self.template = template
        self._circuits: dict[str, Circuit] = {}
        self._lock = threading.Lock()

    def _circuit(self, name: str) -> Circuit:
        with self._lock:
            circuit = self._circuits.get(name)
            if circuit is None:
                circuit = Circuit(
                    self.template.max_failures,
                    self.template.reset_after,
                    clock=self.template.clock,
                )
                self._circuits[name] = circuit
            return circuit

    def alert(self, event: Event) -> None:
        """Forward to ``inner`` when the job's circuit is closed or half-open."""
        name = event.job.name
        circuit = self._circuit(name)
        if not circuit.allow():
            raise CircuitOpenError(name)
        try:
            self.inner.alert(event)
        except Exception:
            circuit.record_failure()
            raise
        circuit.record_success()