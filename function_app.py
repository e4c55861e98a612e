"""
IoT monitoring - Azure Functions application (Python v2 programming model).

Routes are registered without the default "api" prefix (see host.json), so
the device API is served from /api/devices and robot status from
/robots/status.
"""

import azure.functions as func

from iotmon_functions.functions import run_device_state, run_waterbot_status

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)


@app.function_name(name="CurrentStateApiFunction")
@app.route(route="api/devices/{id?}", methods=["GET", "POST", "PUT", "DELETE"])
def current_state_api(req: func.HttpRequest) -> func.HttpResponse:
    return run_device_state(req)


@app.function_name(name="GetWaterBotLatestStatus")
@app.route(route="robots/status", methods=["GET"])
def waterbot_latest_status(req: func.HttpRequest) -> func.HttpResponse:
    return run_waterbot_status(req)
