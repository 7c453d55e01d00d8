# app/config.py
import os


class Settings:
    # Image listing (GitHub repository contents)
    GITHUB_USERNAME: str = os.getenv("GITHUB_USERNAME", "Mohsin241002")
    GITHUB_REPO: str = os.getenv("GITHUB_REPO", "images")
    GITHUB_TOKEN: str | None = os.getenv("GITHUB_TOKEN") or None
    GITHUB_API_URL: str = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")

    # Quote sheet (must be shared as "Anyone with the link")
    GOOGLE_SHEETS_ID: str = os.getenv(
        "GOOGLE_SHEETS_ID", "1wrrH8GocmtdfbHRo0r-ERHmyjk1wKqyrSbu-Oqn9Vxw"
    )

    # Outbound HTTP
    USER_AGENT: str = "daily-inspiration-app"
    UPSTREAM_TIMEOUT_SECS: float = float(os.getenv("UPSTREAM_TIMEOUT_SECS", "15"))
    UPSTREAM_MAX_REDIRECTS: int = int(os.getenv("UPSTREAM_MAX_REDIRECTS", "10"))


settings = Settings()
