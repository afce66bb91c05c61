"""ICardRenderer adapter: headless Chrome screenshot through Selenium."""

import base64
from urllib.parse import quote

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options

from reddit_shorts import config
from reddit_shorts.errors import CardRenderError
from reddit_shorts.ports.interfaces import ICardRenderer

TRANSPARENT = {"color": {"r": 0, "g": 0, "b": 0, "a": 0}}


class SeleniumCardRenderer(ICardRenderer):
    """Renders markup at a fixed viewport and captures the full page height as a transparent PNG."""

    def __init__(self, width: int = None, height: int = None):
        self.width = width or config.CARD_VIEWPORT_WIDTH
        self.height = height or config.CARD_VIEWPORT_HEIGHT

    def _options(self) -> Options:
        options = Options()
        options.add_argument("--headless=new")
        options.add_argument(f"--window-size={self.width},{self.height}")
        options.add_argument("--hide-scrollbars")
        options.add_argument("--force-device-scale-factor=1")
        return options

    def render_card(self, markup: str) -> bytes:
        try:
            driver = webdriver.Chrome(options=self._options())
        except WebDriverException as e:
            raise CardRenderError(f"Could not start headless Chrome: {e.msg}") from e

        try:
            driver.execute_cdp_cmd(
                "Emulation.setDeviceMetricsOverride",
                {"width": self.width, "height": self.height, "deviceScaleFactor": 1, "mobile": False},
            )
            driver.execute_cdp_cmd("Emulation.setDefaultBackgroundColorOverride", TRANSPARENT)
            driver.get("data:text/html;charset=utf-8," + quote(markup))
            full_width, full_height = driver.execute_script(
                "const el = document.documentElement;"
                "return [Math.ceil(el.scrollWidth), Math.ceil(el.scrollHeight)];"
            )
            shot = driver.execute_cdp_cmd(
                "Page.captureScreenshot",
                {
                    "format": "png",
                    "captureBeyondViewport": True,
                    "clip": {
                        "x": 0,
                        "y": 0,
                        "width": max(full_width, self.width),
                        "height": max(full_height, 1),
                        "scale": 1,
                    },
                },
            )
            return base64.b64decode(shot["data"])
        except WebDriverException as e:
            raise CardRenderError(f"Card screenshot failed: {e.msg}") from e
        finally:
            driver.quit()
