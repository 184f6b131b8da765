from acick.services.atcoder import AtcoderActor
from acick.services.interfaces import Act
from acick.services.testcase_fetcher import TestcaseFetcher


def create_atcoder_actor(settings) -> AtcoderActor:
    """Factory function to create the AtCoder actor with all dependencies."""
    from acick.infrastructure.http_client import HttpClient

    http_client = HttpClient(settings.session)
    return AtcoderActor(settings.session, client=http_client)


__all__ = ["Act", "AtcoderActor", "TestcaseFetcher", "create_atcoder_actor"]
