from procmon.models.sample import AggregateMetrics
from procmon.service.provider.process_info_provider import ProcessInfoProvider
from procmon.util.cal_utils import bytes_to_mb
from procmon.util.log_config import setup_logger

logger = setup_logger(__name__)


class ProcessAggregator:
    """Sum memory and handle usage over every process sharing a name."""

    def __init__(self, provider: ProcessInfoProvider):
        self.provider = provider

    def collect(self, process_name: str) -> AggregateMetrics:
        """
        Read all instances called process_name right now.

        Each instance's byte counts are truncated to MB before summing. No
        matching process gives all-zero metrics.
        """
        working_set_mb = 0
        private_mb = 0
        open_handles = 0

        instances = self.provider.instances(process_name)
        for inst in instances:
            working_set_mb += bytes_to_mb(inst.working_set_bytes)
            private_mb += bytes_to_mb(inst.private_bytes)
            open_handles += inst.handles

        if not instances:
            logger.debug(f"No running instance named {process_name}")

        return AggregateMetrics(
            working_set_mb=working_set_mb,
            private_mb=private_mb,
            open_handles=open_handles,
            instance_count=len(instances),
        )
