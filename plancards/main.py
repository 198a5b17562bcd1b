from dotenv import load_dotenv
from fastapi import FastAPI

from plancards.app.config import configure_logging, load_plan_card_config
from plancards.app.routes.plan_cards import router as plan_cards_router

load_dotenv()


def create_app() -> FastAPI:
    configure_logging(load_plan_card_config())
    application = FastAPI(title="Plan Cards API")
    application.include_router(plan_cards_router)
    return application


app = create_app()
