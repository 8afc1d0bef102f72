from fastapi import status

from cropcast.models.flow_result import FlowResult


def flow_status_code(result: FlowResult) -> int:
    if result.is_success:
        return status.HTTP_200_OK
    if result.errors:
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_502_BAD_GATEWAY
