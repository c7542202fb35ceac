# app/core/errors.py


class HelpdeskError(RuntimeError):
    user_message: str = "An unexpected error occurred."


class ConfirmationRequiredError(HelpdeskError):
    user_message = "Clearing all tickets requires explicit confirmation."


class StorageWriteError(HelpdeskError):
    user_message = "The change was applied but could not be saved to storage."


class StorageReadError(HelpdeskError):
    user_message = "Stored tickets could not be read."
