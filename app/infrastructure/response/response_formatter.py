from typing import Any, Dict, Optional, Union, List


def standard_response(
    data: Optional[Union[Dict[str, Any], List[Any], str, int, float, bool]] = None,
    code: int = 200,
    msg: str = "success",
) -> Dict[str, Any]:
    """
    Build the standard response envelope

    Args:
        data: payload of any JSON-compatible type
        code: logical status code, 200 for success
        msg: human readable message

    Returns:
        Dict[str, Any]: {"code": ..., "data": ..., "msg": ...}
    """
    return {
        "code": code,
        "data": data,
        "msg": msg,
    }


def success_response(
    data: Optional[Union[Dict[str, Any], List[Any], str, int, float, bool]] = None,
    msg: str = "success",
) -> Dict[str, Any]:
    """
    Build a success envelope
    """
    return standard_response(data=data, code=200, msg=msg)


def error_response(
    msg: str = "operation failed",
    code: int = 400,
    data: Optional[Union[Dict[str, Any], List[Any], str]] = None,
) -> Dict[str, Any]:
    """
    Build an error envelope

    Args:
        msg: error message
        code: logical status code, 400 by default
        data: optional error details
    """
    return standard_response(data=data, code=code, msg=msg)


def not_found_response(entity: str = "Resource") -> Dict[str, Any]:
    """
    Build a 404 envelope for a missing entity
    """
    return error_response(msg=f"{entity} not found", code=404)
