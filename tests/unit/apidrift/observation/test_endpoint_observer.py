"""Tests for endpoint-level observation."""

from __future__ import annotations

from apidrift.models import TrafficSample
from apidrift.observation.endpoint_observer import build_endpoint_observation
from apidrift.types import HttpMethod


def _make_sample(status_code: int = 200, response_body=None, request_body=None) -> TrafficSample:
    return TrafficSample(
        timestamp="2024-01-01T00:00:00Z",
        method="POST",
        path="/users",
        status_code=status_code,
        request_body=request_body,
        response_body=response_body,
    )


class TestBuildEndpointObservation:
    def test_aggregates_bodies_and_status_codes(self, window):
        samples = [
            _make_sample(201, {"id": 1}, {"name": "A"}),
            _make_sample(201, {"id": 2}, {"name": "B"}),
            _make_sample(400, {"error": "bad"}, {}),
        ]
        observation = build_endpoint_observation(HttpMethod.POST, "/users", samples, window)

        assert observation.method == HttpMethod.POST
        assert observation.path == "/users"
        assert observation.status_codes == {201: 2, 400: 1}
        assert [f.path for f in observation.response_fields] == ["error", "id"]
        assert [f.path for f in observation.request_fields] == ["name"]
        assert observation.window == window

    def test_request_and_response_counted_separately(self, window):
        samples = [_make_sample(200, {"id": 1}, None), _make_sample(200, None, None)]
        observation = build_endpoint_observation(HttpMethod.POST, "/users", samples, window)
        assert observation.response_fields[0].occurrence_percentage == 50.0
        assert observation.request_fields == []
