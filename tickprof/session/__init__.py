"""Session state machine and reporting policies."""

from tickprof.session.controller import SessionController
from tickprof.session.policies import POLICY_REGISTRY, resolve_report_action

__all__ = ["POLICY_REGISTRY", "SessionController", "resolve_report_action"]
