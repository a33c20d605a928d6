from .process_launcher import launch, process_name_for, terminate_existing

__all__ = ["launch", "process_name_for", "terminate_existing"]
