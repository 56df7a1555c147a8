import logging

import uvicorn
from activities.api.api_run import app
from activities.events.Event_Bus import (
    GLOBAL_EVENT_BUS, PLAN_CHANGED, PLAN_ASSIGNMENT_REJECTED, PLAN_REPLACED, log_listener
)
from activities.utilities.config import APP_HOST, APP_PORT, DEBUG, LOG_LEVEL
from activities.utilities.network import planner_urls


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if DEBUG:
        for event_name in (PLAN_CHANGED, PLAN_ASSIGNMENT_REJECTED, PLAN_REPLACED):
            GLOBAL_EVENT_BUS.subscribe(event_name, log_listener)
    urls = planner_urls(APP_PORT)
    print(f"Activities planner on {urls['local']} (Press CTRL+C to quit)")
    if urls["lan"]:
        # phones on the same wifi
        print(f"Open from other devices at: {urls['lan']}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
