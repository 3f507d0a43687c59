"""Tests for corpus and weather providers."""

import json
from unittest.mock import Mock

import pytest
import requests

from omnibox.models.context import UnitSystem
from omnibox.models.query import QueryType
from omnibox.models.suggestion import FieldsPreview
from omnibox.providers import (
    CorpusCategory,
    CorpusItem,
    HttpWeatherProvider,
    InMemoryCorpusProvider,
    JsonCorpusProvider,
    StaticWeatherProvider,
    weather_search_link,
)


def test_in_memory_corpus_returns_category_items():
    provider = InMemoryCorpusProvider()
    provider.add(CorpusCategory.BOOKMARK, CorpusItem(label="Vela", url="https://vela.app"))

    assert [i.label for i in provider.search(CorpusCategory.BOOKMARK, "ve")] == ["Vela"]
    assert provider.search(CorpusCategory.TAB, "ve") == []


def test_json_corpus_provider(tmp_path):
    corpus_file = tmp_path / "corpus.json"
    corpus_file.write_text(
        json.dumps(
            {
                "bookmark": [{"label": "Rust Book", "url": "https://doc.rust-lang.org/book/"}],
                "history": [{"label": "Vela", "metadata": {"visits": "3"}}],
                "extra": "ignored",
            }
        )
    )

    provider = JsonCorpusProvider(corpus_file)

    bookmarks = provider.search(CorpusCategory.BOOKMARK, "")
    assert bookmarks[0].url == "https://doc.rust-lang.org/book/"
    assert provider.search(CorpusCategory.HISTORY, "")[0].metadata == {"visits": "3"}
    assert provider.search(CorpusCategory.TAB, "") == []


def test_json_corpus_provider_rejects_bad_shape(tmp_path):
    corpus_file = tmp_path / "corpus.json"
    corpus_file.write_text(json.dumps({"bookmark": {"label": "not a list"}}))

    with pytest.raises(ValueError, match="must be a list"):
        JsonCorpusProvider(corpus_file)

    corpus_file.write_text(json.dumps(["not", "an", "object"]))
    with pytest.raises(ValueError, match="JSON object"):
        JsonCorpusProvider(corpus_file)


def test_corpus_category_maps_to_query_type():
    assert CorpusCategory.BOOKMARK.query_type == QueryType.BOOKMARK
    assert CorpusCategory.HISTORY.query_type == QueryType.HISTORY
    assert CorpusCategory.TAB.query_type == QueryType.TAB


def test_weather_search_link():
    link = weather_search_link("new york")
    assert link.title == "Get weather for new york"
    assert link.url == "https://weather.com/search?query=new%20york"
    assert link.type == QueryType.WEATHER

    assert weather_search_link(None).title == "Get weather"


def test_static_weather_provider():
    provider = StaticWeatherProvider()

    metric = provider.fetch("London")
    assert metric.title == "15°C Rainy"
    assert metric.subtitle == "Weather in London"

    imperial = provider.fetch("london", units=UnitSystem.IMPERIAL)
    assert imperial.title == "59°F Rainy"

    assert provider.fetch("atlantis") is None


def _response(payload):
    response = Mock()
    response.status_code = 200
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


def test_http_weather_provider_parses_current_condition():
    session = Mock()
    session.get.return_value = _response(
        {
            "current_condition": [
                {
                    "temp_C": "21",
                    "FeelsLikeC": "19",
                    "humidity": "60",
                    "weatherDesc": [{"value": "Sunny"}],
                }
            ]
        }
    )
    provider = HttpWeatherProvider(timeout_seconds=2.0, session=session)

    suggestion = provider.fetch("new york")

    session.get.assert_called_once_with(
        "https://wttr.in/new%20york",
        params={"format": "j1"},
        timeout=2.0,
    )
    assert suggestion.title == "21°C Sunny"
    assert suggestion.type == QueryType.WEATHER
    assert isinstance(suggestion.preview, FieldsPreview)
    assert suggestion.preview.fields == {"humidity": "60%", "feels_like": "19°C"}


def test_http_weather_provider_imperial():
    session = Mock()
    session.get.return_value = _response(
        {"current_condition": [{"temp_C": "0", "weatherDesc": [{"value": "Snow"}]}]}
    )
    suggestion = HttpWeatherProvider(session=session).fetch("oslo", units=UnitSystem.IMPERIAL)
    assert suggestion.title == "32°F Snow"


def test_http_weather_provider_missing_data_returns_none():
    session = Mock()
    session.get.return_value = _response({"nearest_area": []})
    assert HttpWeatherProvider(session=session).fetch("nowhere") is None

    session.get.return_value = _response({"current_condition": [{"temp_C": "n/a"}]})
    assert HttpWeatherProvider(session=session).fetch("nowhere") is None


@pytest.mark.parametrize(
    "current",
    [
        {"temp_C": "12", "FeelsLikeC": "n/a"},
        {"temp_C": "12", "FeelsLikeC": None},
        {"temp_C": "12", "weatherDesc": ["Cloudy"]},
        {"temp_C": "12", "weatherDesc": "Cloudy"},
    ],
)
def test_http_weather_provider_malformed_fields_return_none(current):
    session = Mock()
    session.get.return_value = _response({"current_condition": [current]})
    assert HttpWeatherProvider(session=session).fetch("nowhere") is None


def test_http_weather_provider_propagates_http_errors():
    session = Mock()
    response = _response({})
    response.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
    session.get.return_value = response

    with pytest.raises(requests.HTTPError):
        HttpWeatherProvider(session=session).fetch("london")
