class QuizMasterError(Exception):
    """Base class for errors raised by the quiz backend."""


class StoreError(QuizMasterError):
    """A database query failed while a job was running."""


class UnknownJob(QuizMasterError):
    def __init__(self, job_name: str):
        self.job_name = job_name
        super().__init__(f"Unknown job: {job_name}")


class DeliveryError(QuizMasterError):
    """The mail transport could not deliver a message."""


class JobSkipped(QuizMasterError):
    """
    Raised by a job handler when its work for the current period is already done.
    The runner records the job as SKIPPED instead of COMPLETED.
    """

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)
