import multiprocessing
import os
import random
import subprocess
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from uuid import UUID

import uvicorn
from fastapi import BackgroundTasks, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import SecretStr
from starlette.responses import RedirectResponse

from api.auth import verify_api_key, verify_webhook_secret
from api.model.payment_webhook_payload import PaymentWebhookPayload
from db.sql import dispose_db, get_session, initialize_db
from di.di import DI
from features.fulfillment.fulfillment_dispatcher import FulfillmentResult, dispatch_fulfillment
from util import log
from util.config import Config, config
from util.errors import ServiceError


# noinspection PyUnusedLocal
@asynccontextmanager
async def lifespan(owner: FastAPI):
    process_name = multiprocessing.current_process().name
    worker_type = "main" if process_name == "MainProcess" else "worker"
    worker_info = f"[{worker_type}-{os.getpid()}] {process_name}"
    log.i(f"Lifecycle: Starting up {worker_info}")
    initialize_db()
    yield  # this holds the app alive until the server is shut down
    dispose_db()
    log.i(f"Lifecycle: Shutting down {worker_info}...")


app = FastAPI(
    docs_url = None,
    redoc_url = None,
    title = f"{config.store_name} Orders API",
    description = "Order revenue attribution and fulfillment for the storefront.",
    debug = config.log_level in ["local", "trace", "debug"],
    lifespan = lifespan,
)

# noinspection PyTypeChecker
app.add_middleware(
    CORSMiddleware,
    allow_origins = ["*"],
    allow_credentials = False,
    allow_methods = ["*"],
    allow_headers = ["*"],
)


@app.get("/")
def root() -> RedirectResponse:
    return RedirectResponse(url = config.app_url)


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "version": config.version}


@app.post("/webhooks/payments")
def payment_webhook(
    payload: PaymentWebhookPayload,
    offloader: BackgroundTasks,
    db = Depends(get_session),
    _ = Depends(verify_webhook_secret),
) -> dict:
    try:
        di = DI(db)
        order_id = di.payment_webhook_controller.handle_event(payload)
        if order_id is not None:
            offloader.add_task(dispatch_fulfillment, order_id)
        return {"received": True}
    except ServiceError as e:
        raise HTTPException(status_code = e.http_status, detail = e.to_api_dict())
    except Exception as e:
        reason = __without_secrets(log.e("Failed to handle payment event", e))
        raise HTTPException(status_code = 500, detail = {"reason": reason})


@app.post("/orders/{order_id}/fulfillment")
def fulfill_order(
    order_id: int,
    db = Depends(get_session),
    _ = Depends(verify_api_key),
) -> FulfillmentResult:
    try:
        log.d(f"Manually dispatching fulfillment for order '{order_id}'")
        di = DI(db)
        return di.fulfillment_dispatcher.dispatch(order_id)
    except ServiceError as e:
        raise HTTPException(status_code = e.http_status, detail = e.to_api_dict())
    except Exception as e:
        reason = __without_secrets(log.e("Failed to dispatch fulfillment", e))
        raise HTTPException(status_code = 500, detail = {"reason": reason})


def __without_secrets(reason: str) -> str:
    clean_reason = reason
    for secret in config.all_secrets():
        if secret_value := secret.get_secret_value():
            clean_reason = clean_reason.replace(secret_value, "****")
    return clean_reason


# The main runner
if __name__ == "__main__":
    if "--dev" in sys.argv:  # when running locally...
        os.environ["LOG_LEVEL"] = "debug"
        config.log_level = "debug"
        os.environ["API_KEY"] = "developer"
        config.api_key = SecretStr("developer")
        workers = 1
        reload = True
        print("INFO:     Launching in dev mode...")
    else:  # when running in production...
        # generate a random API key to prevent use of the default API key
        if config.api_key.get_secret_value() == Config.DEV_API_KEY:
            api_key = str(UUID(int = random.randint(0, 2 ** 128 - 1))).upper()
            os.environ["API_KEY"] = api_key
            config.api_key = SecretStr(api_key)
            print("WARN:     Generated a new API key!", config.api_key.get_secret_value(), file = sys.stderr)
        if not config.webhook_must_auth:
            print("WARN:     Payment webhooks are accepted without a secret!", file = sys.stderr)
        workers = 2
        reload = False
        # and run the database migrations
        print("INFO:     Running database migrations...")
        subprocess.run(["./tools/db_apply_migration.sh", "-y"], check = True)
        print("INFO:     Launching in production mode...")
    uvicorn_log_level = "debug" if config.log_level == "local" else config.log_level

    # get the service version
    if (version_file := Path("./.version")).exists():
        version_name = version_file.read_text().strip()
        if version_name:
            os.environ["VERSION"] = version_name
            config.version = version_name
            print("INFO:     Version file found", f"v{config.version}")
        else:
            print("ERROR:    Version file empty", file = sys.stderr)
    else:
        print("ERROR:    Version file not found, using dev version", file = sys.stderr)

    # finally, start the server
    uvicorn.run(
        "main:app",
        host = "0.0.0.0",
        port = 80,
        log_level = uvicorn_log_level,
        workers = workers,
        reload = reload,
    )
