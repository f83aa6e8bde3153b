"""Shared fixtures: a small dataset whose emission order and tags are known."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from promptlib.library import PromptLibrary
from promptlib.loader import Corpus, load


def _entry(prompt: str, tags: list[str], context: str = "") -> dict[str, Any]:
    return {"prompt": prompt, "context": context, "tags": tags}


# Categories are deliberately out of canonical order to exercise emission order.
SAMPLE_DATASET: dict[str, Any] = {
    "metadata": {"version": "1.0.0", "platform": "Sitecore", "author": "tests"},
    "categories": {
        "components": {
            "carousel": {
                "name": "Carousel",
                "description": "Responsive carousel with touch support",
                "prompts": {
                    "development": _entry(
                        "Build a carousel rendering.", ["carousel", "responsive"]
                    ),
                },
            },
            "navigation": {
                "name": "Navigation",
                "description": "Multi-level menu from the content tree",
                "prompts": {
                    "development": _entry("Build a navigation menu.", ["navigation", "menu"]),
                },
            },
            "custom_forms": {
                "name": "Custom Forms",
                "description": "Dynamic form builder",
                "prompts": {
                    "development": _entry(
                        "Render the flibbertigibbet widget.", ["forms", "validation"]
                    ),
                },
            },
        },
        "foundation": {
            "service_interface": {
                "name": "Service Interface",
                "description": "Foundation service interface with logging",
                "prompts": {
                    "development": _entry(
                        "Create a service interface.",
                        ["service", "interface", "logging"],
                        context="Backend development",
                    ),
                    "testing": _entry("Test the service.", ["service", "unit-test"]),
                },
            },
            "cache_service": {
                "name": "Cache Service",
                "description": "Caching on top of the cache manager",
                "prompts": {
                    "development": _entry("Implement a cache service.", ["cache", "performance"]),
                },
            },
        },
        "feature": {
            "controller": {
                "name": "Feature Controller",
                "description": "MVC controller rendering",
                "prompts": {
                    "development": _entry("Create a controller rendering.", ["controller", "mvc"]),
                },
            },
            "view_model": {
                "name": "View Model",
                "description": "Rendering view model",
                "prompts": {
                    "development": _entry("Create a view model.", ["viewmodel", "model"]),
                },
            },
        },
        "testing": {
            "unit_test": {
                "name": "Unit Test",
                "description": "Create unit test with mocking",
                "prompts": {"development": _entry("// test", ["mocking"])},
            },
            "integration_test": {
                "name": "Integration Test",
                "description": "End to end rendering pipeline checks",
                "prompts": {"testing": _entry("// integration", ["integration"])},
            },
        },
        "styling": {
            "css_framework": {
                "name": "CSS Framework",
                "description": "BEM based stylesheet architecture",
                "prompts": {"development": _entry("/* styles */", ["scss", "bem"])},
            },
        },
    },
    "sdlc_stages": {
        "planning": {"name": "Planning", "description": "Requirements and design"},
        "development": {"name": "Development", "description": "Implementation"},
        "testing": {"name": "Testing", "description": "Verification"},
    },
}

# Expected emission order for SAMPLE_DATASET
SAMPLE_IDS: list[str] = [
    "foundation-service_interface-development",
    "foundation-service_interface-testing",
    "foundation-cache_service-development",
    "feature-controller-development",
    "feature-view_model-development",
    "components-carousel-development",
    "components-navigation-development",
    "components-custom_forms-development",
    "testing-unit_test-development",
    "testing-integration_test-testing",
    "styling-css_framework-development",
]


@pytest.fixture()
def sample_dataset() -> dict[str, Any]:
    """A fresh deep copy so tests can mutate it freely."""
    return copy.deepcopy(SAMPLE_DATASET)


@pytest.fixture()
def corpus(sample_dataset: dict[str, Any]) -> Corpus:
    return load(sample_dataset)


@pytest.fixture()
def library(corpus: Corpus) -> PromptLibrary:
    return PromptLibrary(corpus)


@pytest.fixture()
def sample_ids() -> list[str]:
    return list(SAMPLE_IDS)
