from enum import IntEnum


class ResponseCode(IntEnum):
    SUCCESS = 0
    FAIL = 1
    UNPROCESSABLE_ENTITY = 422
