"""
Weather forecast API endpoints

CRUD over weather forecasts. Each endpoint makes a single service call, and the
service opens and closes its own database session for that call. Responses use
the standard {"code", "data", "msg"} envelope.
"""
import logging

from fastapi import APIRouter, Depends

from app.api.dependencies import get_forecast_service
from app.infrastructure.exceptions import ForecastNotFoundError
from app.infrastructure.response import success_response, error_response, not_found_response
from app.schemas.forecast import ForecastCreate, ForecastRead, ForecastUpdate
from app.services.core.forecast_service import ForecastService

logger = logging.getLogger(__name__)

router = APIRouter()

ENTITY = "Weather forecast"


def _serialize(forecast) -> dict:
    return ForecastRead.model_validate(forecast).model_dump(mode="json")


@router.get("")
async def list_forecasts(
        service: ForecastService = Depends(get_forecast_service),
):
    """
    List all weather forecasts ordered by date

    Returns:
        dict: envelope whose data is the list of forecasts (possibly empty)
    """
    try:
        forecasts = await service.get_all()
        return success_response(data=[_serialize(f) for f in forecasts])
    except Exception as e:
        logger.exception("Listing forecasts failed")
        return error_response(msg=f"Failed to list forecasts: {str(e)}", code=500)


@router.get("/summaries")
async def list_summaries():
    """Summary labels offered as input suggestions"""
    return success_response(data=ForecastService.get_summary_options())


@router.get("/{forecast_id}")
async def get_forecast(
        forecast_id: int,
        service: ForecastService = Depends(get_forecast_service),
):
    """
    Get one forecast by id

    Returns:
        dict: envelope with the forecast, or code 404 when it does not exist
    """
    try:
        forecast = await service.get_by_id(forecast_id)
        if forecast is None:
            return not_found_response(entity=ENTITY)
        return success_response(data=_serialize(forecast))
    except Exception as e:
        logger.exception("Fetching forecast %s failed", forecast_id)
        return error_response(msg=f"Failed to fetch forecast: {str(e)}", code=500)


@router.post("")
async def create_forecast(
        forecast_data: ForecastCreate,
        service: ForecastService = Depends(get_forecast_service),
):
    """
    Create a forecast; the id is assigned by the store
    """
    try:
        forecast = await service.create(forecast_data.to_model())
        return success_response(data=_serialize(forecast), msg="Forecast created")
    except Exception as e:
        logger.exception("Creating forecast failed")
        return error_response(msg=f"Failed to create forecast: {str(e)}", code=500)


@router.put("/{forecast_id}")
async def update_forecast(
        forecast_id: int,
        forecast_data: ForecastUpdate,
        service: ForecastService = Depends(get_forecast_service),
):
    """
    Replace every field of an existing forecast

    Returns:
        dict: envelope with the updated forecast, or code 404 for an unknown id
    """
    try:
        forecast = await service.update(forecast_data.to_model(forecast_id))
        return success_response(data=_serialize(forecast), msg="Forecast updated")
    except ForecastNotFoundError:
        return not_found_response(entity=ENTITY)
    except Exception as e:
        logger.exception("Updating forecast %s failed", forecast_id)
        return error_response(msg=f"Failed to update forecast: {str(e)}", code=500)


@router.delete("/{forecast_id}")
async def delete_forecast(
        forecast_id: int,
        service: ForecastService = Depends(get_forecast_service),
):
    """
    Delete a forecast; deleting an unknown id also succeeds
    """
    try:
        await service.delete(forecast_id)
        return success_response(data=None, msg="Forecast deleted")
    except Exception as e:
        logger.exception("Deleting forecast %s failed", forecast_id)
        return error_response(msg=f"Failed to delete forecast: {str(e)}", code=500)
