"""Default and example labels."""

# good for categorizing debug-level api call info.
API_CALL = "clabel_api_call"
# when you want your log to cause a lot of noise.
ALARM_ON_THIS = "clabel_alarm_on_this"
# info about end-of-run resource cleanup.
CLEANUP = "clabel_cleanup"
# showcases the runtime configuration of the app.
CONFIGURATION = "clabel_configuration"
# everything worth knowing about the process when it concludes.
END_OF_RUN = "clabel_end_of_run"
# marks the error logs to review when asking "what exactly failed in this run?"
FAILURE_ORIGIN = "clabel_failure_origin"
# debug details about every item handled by the process.
INDIVIDUAL_ITEM_DETAILS = "clabel_individual_item_details"
# tracks the completion of long running processes.
PROGRESS_TICKER = "clabel_progress_ticker"
# the state of the application when a new process kicks off.
START_OF_RUN = "clabel_start_of_run"
# who needs a logging level when you can use a label instead?
WARNING = "clabel_warning"

# Fixed keys in every emitted record.
KEY_ERROR = "error"
KEY_ERROR_LABELS = "error_labels"
KEY_LABELS = "clog_labels"
KEY_COMMENTS = "clog_comments"

# Keys owned by the logger itself. Values added under these names are
# emitted with a trailing underscore instead.
RESERVED_KEYS = frozenset({"self", "event", "msg", "level", "timestamp"})
