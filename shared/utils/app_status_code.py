class AppStatusCode:
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    OPERATION_SUCCESSFUL = "101"

    INVALID_INPUT = "200"
    REQUIRED_VALIDATION_ERROR = "201"
    DUPLICATE_ADD_ERROR = "202"

    RECORD_NOT_FOUND = "300"
    FULFILLMENT_REJECTED = "301"

    OPERATION_FAILED = "400"
    OPERATION_ERROR = "401"
    STORAGE_UNAVAILABLE = "402"
