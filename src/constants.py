"""Canonical constants for the showcase scraper."""

# GitHub discussion used as the data source
DEFAULT_ORG = "withastro"
DEFAULT_REPO = "roadmap"
DEFAULT_DISCUSSION = 521
DISCUSSION_PAGE_SIZE = 100

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"
USER_AGENT = "Astro-Showcase-Scraper/1.0"

# Showcase content collection
DEFAULT_SHOWCASE_DIR = "src/content/showcase"
DEFAULT_IMAGE_URL_PREFIX = "/src/content/showcase/_images"
IMAGE_SUBDIR = "_images"

# Screenshot settings
VIEWPORT = {"width": 1280, "height": 720}
DEVICE_SCALE_FACTOR = 1.4
HIRES_IMAGE_WIDTH = 1600
STANDARD_IMAGE_WIDTH = 800

# Settle wait before screenshotting (milliseconds)
SETTLE_DELAY_MS = 2000
SETTLE_IDLE_TIMEOUT_MS = 2000

# Category tag written for Starlight sites
STARLIGHT_CATEGORY = "starlight"

# Origins that should never be added to the showcase
BLOCKED_ORIGINS = [
    "https://github.com",
    "https://user-images.githubusercontent.com",
    "https://camo.githubusercontent.com",
    "https://private-user-images.githubusercontent.com",
    "https://astro.build",
    "https://pagespeed.web.dev",
    "https://lighthouse-metrics.com",
    "https://calckey.org",
    "https://twitter.com",
    "https://youtu.be",
    "https://evadecker.com",  # moved to https://eva.town/

    # 404s - 2024/06/19
    "https://www.enjoyyearof.com/",
    "https://juniorjobs.pages.dev/",
    "https://souto.tk",
    "https://unwrapped.studio/",
    "https://gdscyu.com/",
    "https://ahuja-lab.in/",
    "https://roudstudio.com/",
    "https://oengi.com/",
    "https://kireerik.github.io/refo/",
    "https://zenorocha.com/",
    "https://aperium.sk/",
    "https://www.quickdreamviz.com/",
    "https://taskworld.com/",
    "https://codewithandrea.com/",
    "https://notes.aliciasykes.com",
    "http://www.gooseinsurance.com/",
    "http://www.smartbunny.com/",

    # Not Astro - 2024/07/08
    "https://www.un.org/",
    "https://getcockpit.com/",
    "http://www.taskworld.com/",  # already included using HTTPS
    "http://keyboardcounter.online/",
    "https://jerrywski.netlify.app/",  # already included as https://jerrywski.dev/
]
