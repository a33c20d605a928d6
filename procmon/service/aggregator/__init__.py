from .process_aggregator import ProcessAggregator

__all__ = ["ProcessAggregator"]
