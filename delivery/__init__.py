from delivery.output import deliver_cli, deliver_paths, report_error

__all__ = ["deliver_cli", "deliver_paths", "report_error"]
