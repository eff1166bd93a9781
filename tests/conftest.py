"""Shared fixtures: a small components.d.ts and mocked HTTP plumbing."""

import httpx
import pytest

from va_monitor.config import MonitorConfig
from va_monitor.fetcher import DocumentFetcher
from va_monitor.monitor import ComponentMonitor

SAMPLE_DEFINITIONS = '''/* eslint-disable */
/* tslint:disable */
import { HTMLStencilElement, JSXBase } from "@stencil/core/internal";
export namespace Components {
    /**
     * @componentName Button
     * @maturityCategory use
     * @maturityLevel deployed
     * @guidanceHref button
     * @translations English
     * @translations Spanish
     */
    interface VaButton {
        /**
          * The text displayed on the button.
         */
        "text"?: string;
        /**
          * If `true`, the button will be disabled.
         */
        "disabled"?: boolean;
        "onClick"?: (event: MouseEvent) => void;
    }
    /**
     * @componentName Alert
     * @maturityCategory use
     * @maturityLevel best_practice
     */
    interface VaAlert {
        /**
          * Determines the icon and border/background color.
         */
        "status"?: "info" | "warning" | "error" | "success";
        "headline"?: string;
        "visible"?: boolean;
    }
    /**
     * @componentName Radio button
     * @maturityCategory use
     * @maturityLevel candidate
     */
    interface VaRadio {
        "label"?: string;
        "hint"?: string;
        "required"?: boolean;
        "error"?: string;
    }
    /**
     * @componentName Alert - expandable
     * @maturityCategory caution
     * @maturityLevel available
     */
    interface VaAlertExpandable {
        "trigger": string;
    }
    /**
     * @componentName Telephone
     * @maturityCategory use
     * @maturityLevel available
     */
    interface VaTelephone {
        "contact": string;
    }
    /**
     * Internal helper without metadata
     */
    interface VaInternalThing {
        "foo"?: string;
    }
}
declare module "@stencil/core" {
    export namespace JSX {
        interface IntrinsicElements {
            "va-button": LocalJSX.VaButton & JSXBase.HTMLAttributes<HTMLVaButtonElement>;
            "va-alert": LocalJSX.VaAlert & JSXBase.HTMLAttributes<HTMLVaAlertElement>;
            "va-radio": LocalJSX.VaRadio & JSXBase.HTMLAttributes<HTMLVaRadioElement>;
            "va-alert-expandable": LocalJSX.VaAlertExpandable & JSXBase.HTMLAttributes<HTMLVaAlertExpandableElement>;
            "va-ghost-thing": LocalJSX.VaGhostThing & JSXBase.HTMLAttributes<HTMLVaGhostThingElement>;
        }
    }
}
'''


class FakeClock:
    """Manually advanced time source (seconds)."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Sleep replacement that records requested delays and returns at once."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def definitions_handler(document: str = SAMPLE_DEFINITIONS, stories=None, calls=None):
    """
    MockTransport handler serving the definitions document and story files.

    Args:
        document: Body for components.d.ts requests
        stories: Mapping of repository path suffix to story file text
        calls: Optional list collecting requested URL paths
    """
    stories = stories or {}

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if calls is not None:
            calls.append(path)
        if path.endswith("components.d.ts"):
            return httpx.Response(200, text=document)
        for suffix, body in stories.items():
            if path.endswith(suffix):
                return httpx.Response(200, text=body)
        return httpx.Response(404, text="404: Not Found")

    return handler


def build_monitor(handler, clock=None, sleep=None, **options) -> ComponentMonitor:
    config = MonitorConfig(**options)
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    fetcher = DocumentFetcher(config, client=client, sleep=sleep or RecordingSleep(), token="")
    if clock is None:
        return ComponentMonitor(config=config, fetcher=fetcher)
    return ComponentMonitor(config=config, fetcher=fetcher, clock=clock)


@pytest.fixture
def sample_definitions() -> str:
    return SAMPLE_DEFINITIONS


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def monitor(clock) -> ComponentMonitor:
    return build_monitor(definitions_handler(), clock=clock)
