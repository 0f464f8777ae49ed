import uvicorn

from contractor_ads.core.config import settings


def main():
    """Serve the API with uvicorn on the configured host and port"""
    uvicorn.run(
        "contractor_ads.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # keep the central logging setup
    )

if __name__ == "__main__":
    main()
