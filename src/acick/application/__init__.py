from acick.application.orchestrator import AcickOrchestrator, FetchOutcome, SubmitOutcome
from acick.application.workspace import Workspace


def create_orchestrator(contest_id, console=None) -> AcickOrchestrator:
    """Factory function wiring settings, actor, workspace and console."""
    from acick.domain.models import ContestId
    from acick.infrastructure.config import AcickSettings
    from acick.infrastructure.console import Console
    from acick.services import create_atcoder_actor

    settings = AcickSettings.from_env()
    console = console or Console.term(settings.console)
    base_dir = Workspace.find_base_dir(settings.base_dir) or settings.base_dir
    workspace = Workspace(base_dir, ContestId(str(contest_id)))
    return AcickOrchestrator(settings, create_atcoder_actor(settings), workspace, console)


__all__ = ["AcickOrchestrator", "FetchOutcome", "SubmitOutcome", "Workspace", "create_orchestrator"]
