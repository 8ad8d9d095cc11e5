"""
Playwright rendering sessions.

A PageSession owns one browser. It is opened at the start of extraction and
must be closed on every exit path; open() tears the browser down itself when
navigation fails so the caller never receives a half-open session.
"""

from playwright.async_api import async_playwright

from wireframer.config import get_settings
from wireframer.errors import RenderingError


class PageSession:
    """A loaded page plus the browser resources behind it."""

    def __init__(self, playwright, browser, page):
        self._playwright = playwright
        self._browser = browser
        self.page = page
        self.closed = False

    async def evaluate(self, script: str, arg=None):
        if self.closed:
            raise RenderingError("Rendering session is already closed")
        if arg is None:
            return await self.page.evaluate(script)
        return await self.page.evaluate(script, arg)

    async def close(self):
        """Release the browser. Never raises, so an extraction error stays the one reported."""
        if self.closed:
            return
        self.closed = True
        try:
            await self._browser.close()
        except Exception as e:
            print(f"  [render] Browser close failed: {e}")
        try:
            await self._playwright.stop()
        except Exception as e:
            print(f"  [render] Playwright stop failed: {e}")
        print("  [render] Browser closed")


class PlaywrightRenderer:
    """Opens headless Chromium sessions with fixed navigation timeouts."""

    def __init__(self, settings=None):
        self.settings = settings or get_settings()

    async def open(self, url: str) -> PageSession:
        s = self.settings
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(
                headless=True,
                args=["--no-sandbox", "--disable-setuid-sandbox"],
            )
        except Exception as e:
            await playwright.stop()
            raise RenderingError(f"Failed to launch browser: {e}", cause=e) from e

        session = PageSession(playwright, browser, None)
        try:
            context = await browser.new_context(
                viewport={"width": s.viewport_width, "height": s.viewport_height},
                user_agent=s.user_agent,
            )
            page = session.page = await context.new_page()

            # networkidle first, domcontentloaded as the quick fallback
            try:
                await page.goto(url, wait_until="networkidle", timeout=s.page_load_timeout)
            except Exception:
                await page.goto(url, wait_until="domcontentloaded", timeout=s.page_load_timeout)
            await page.wait_for_selector("body", timeout=s.selector_timeout)
            await page.wait_for_timeout(s.settle_delay)
            await prepare_page(page)
        except Exception as e:
            await session.close()
            raise RenderingError(f"Failed to load {url}: {e}", cause=e) from e

        print(f"  [render] Loaded {url}")
        return session


async def prepare_page(page):
    """Dismiss consent banners and trigger lazy content so the DOM is stable."""

    await page.evaluate('''() => {
        const btns = document.querySelectorAll(
            '[class*="cookie"] button, [id*="cookie"] button, ' +
            '[class*="consent"] button, [aria-label*="accept"], ' +
            '[aria-label*="Accept"], [class*="gdpr"] button'
        );
        for (const btn of btns) {
            if (btn.innerText.match(/accept|agree|got it|ok|close|dismiss/i)) {
                btn.click();
                break;
            }
        }
    }''')
    await page.wait_for_timeout(500)

    # Scroll to trigger lazy loading (capped to avoid infinite scroll pages)
    await page.evaluate('''async () => {
        await new Promise(resolve => {
            let total = 0;
            const distance = 400;
            const maxScroll = 15000;
            let iterations = 0;
            const maxIterations = 50;
            const timer = setInterval(() => {
                window.scrollBy(0, distance);
                total += distance;
                iterations++;
                if (total >= document.body.scrollHeight || total >= maxScroll || iterations >= maxIterations) {
                    clearInterval(timer);
                    window.scrollTo(0, 0);
                    resolve();
                }
            }, 100);
        });
    }''')
    await page.wait_for_timeout(1000)
