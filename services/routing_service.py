"""Routing orchestration for proxy requests."""

from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import PreparedRequest, RequestDescriptor
from core.router import RouteDecider, TargetKind
from core.transform import RequestTransformer
from services.targets import JiraTarget, TempoTarget


class RoutingService:
    """Prepare requests for routing to Jira or Tempo."""

    def __init__(
        self,
        logger: RequestLogger,
        decider: RouteDecider,
        transformer: RequestTransformer,
        header_builder: HeaderBuilder,
        jira_target: JiraTarget | None = None,
        tempo_target: TempoTarget | None = None,
    ) -> None:
        self._decider = decider
        self._jira = jira_target or JiraTarget(logger, transformer, header_builder)
        self._tempo = tempo_target or TempoTarget(logger, transformer, header_builder)

    def prepare(self, descriptor: RequestDescriptor) -> PreparedRequest:
        """Resolve the target and build the outgoing request.

        Raises:
            InvalidInput: Jira request without a base URL.
        """
        decision = self._decider.decide(descriptor)
        if decision.kind is TargetKind.TEMPO:
            return self._tempo.prepare(descriptor, decision)
        return self._jira.prepare(descriptor, decision)
