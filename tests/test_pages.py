"""Tests for the server-rendered weather pages."""
import asyncio
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from app.models.forecast import WeatherForecast


def add_forecast(service, day=date(2024, 1, 1), temperature_c=20, summary="Mild"):
    return asyncio.run(service.create(
        WeatherForecast(date=day, temperature_c=temperature_c, summary=summary)
    ))


class TestWeatherList:

    def test_empty_list(self, client):
        response = client.get("/weather")
        assert response.status_code == 200
        assert "No forecasts" in response.text

    def test_lists_forecasts_with_both_temperatures(self, client, service):
        add_forecast(service, temperature_c=20, summary="Balmy")
        response = client.get("/weather")
        assert response.status_code == 200
        assert "2024-01-01" in response.text
        assert "<td>67</td>" in response.text
        assert "Balmy" in response.text


class TestCreatePage:

    def test_form_offers_summary_suggestions(self, client):
        response = client.get("/weather/new")
        assert response.status_code == 200
        assert '<option value="Sweltering">' in response.text

    def test_submit_creates_and_redirects(self, client, service):
        response = client.post(
            "/weather/new",
            data={"date": "2024-02-02", "temperature_c": "-3", "summary": "Bracing"},
            follow_redirects=False,
        )
        assert response.status_code == 303
        assert response.headers["location"] == "/weather"

        forecasts = asyncio.run(service.get_all())
        assert len(forecasts) == 1
        assert forecasts[0].temperature_c == -3
        assert forecasts[0].summary == "Bracing"

    def test_invalid_submit_rerenders_form(self, client, service):
        response = client.post(
            "/weather/new",
            data={"date": "", "temperature_c": "hot", "summary": "Hot"},
        )
        assert response.status_code == 400
        assert "temperature_c" in response.text
        assert 'value="Hot"' in response.text
        assert asyncio.run(service.get_all()) == []


class TestEditPage:

    def test_form_prefilled(self, client, service):
        created = add_forecast(service, temperature_c=12, summary="Cool")
        response = client.get(f"/weather/{created.id}/edit")
        assert response.status_code == 200
        assert 'value="2024-01-01"' in response.text
        assert 'value="12"' in response.text
        assert 'value="Cool"' in response.text

    def test_missing_forecast_shows_not_found(self, client):
        response = client.get("/weather/99/edit")
        assert response.status_code == 404
        assert "Not found" in response.text

    def test_submit_updates_and_redirects(self, client, service):
        created = add_forecast(service)
        response = client.post(
            f"/weather/{created.id}/edit",
            data={"date": "2024-09-09", "temperature_c": "40", "summary": "Scorching"},
            follow_redirects=False,
        )
        assert response.status_code == 303

        found = asyncio.run(service.get_by_id(created.id))
        assert found.date == date(2024, 9, 9)
        assert found.temperature_c == 40
        assert found.summary == "Scorching"

    def test_submit_for_vanished_forecast_shows_not_found(self, client):
        response = client.post(
            "/weather/5/edit",
            data={"date": "2024-09-09", "temperature_c": "40", "summary": ""},
        )
        assert response.status_code == 404


class TestDeletePage:

    def test_delete_and_redirect(self, client, service):
        created = add_forecast(service)
        response = client.post(f"/weather/{created.id}/delete", follow_redirects=False)
        assert response.status_code == 303
        assert asyncio.run(service.get_by_id(created.id)) is None

    def test_delete_missing_still_redirects(self, client):
        response = client.post("/weather/1234/delete", follow_redirects=False)
        assert response.status_code == 303


class TestErrorPages:

    def test_unknown_path_renders_not_found(self, client):
        response = client.get("/no-such-page")
        assert response.status_code == 404
        assert "does not exist" in response.text

    def test_unknown_api_path_stays_json(self, client):
        response = client.get("/api/no-such-endpoint")
        assert response.status_code == 404
        assert response.json() == {"detail": "Not Found"}

    def test_store_error_renders_error_page_outside_debug(self, make_client, unavailable_factory):
        client = make_client(unavailable_factory, debug=False, raise_server_exceptions=False)
        response = client.get("/weather")
        assert response.status_code == 500
        assert "An error occurred while processing your request" in response.text

    def test_store_error_propagates_in_debug(self, make_client, unavailable_factory):
        client = make_client(unavailable_factory, debug=True)
        with pytest.raises(OperationalError):
            client.get("/weather")


class TestOutOfRangeIds:
    TOO_LARGE = 2 ** 63

    @pytest.fixture
    def page_client(self, make_client, context_factory):
        return make_client(context_factory, debug=False, raise_server_exceptions=False)

    def test_edit_form_shows_not_found(self, page_client):
        response = page_client.get(f"/weather/{self.TOO_LARGE}/edit")
        assert response.status_code == 404
        assert "does not exist" in response.text

    def test_edit_submit_shows_not_found(self, page_client):
        response = page_client.post(
            f"/weather/{self.TOO_LARGE}/edit",
            data={"date": "2024-09-09", "temperature_c": "40", "summary": ""},
        )
        assert response.status_code == 404

    def test_delete_redirects(self, page_client):
        response = page_client.post(f"/weather/{self.TOO_LARGE}/delete", follow_redirects=False)
        assert response.status_code == 303
