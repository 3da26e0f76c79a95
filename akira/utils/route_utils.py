from fastapi import FastAPI
from fastapi.routing import APIRoute


def ensure_unique_route_names(app: FastAPI) -> None:
    """
    Check that every route name is unique

    :param app:
    :return:
    """
    seen: set[str] = set()
    for route in app.routes:
        if isinstance(route, APIRoute):
            if route.name in seen:
                raise ValueError(f"Non-unique route name: {route.name}")
            seen.add(route.name)


def simplify_operation_ids(app: FastAPI) -> None:
    """
    Use the route name as the OpenAPI operationId

    :param app:
    :return:
    """
    for route in app.routes:
        if isinstance(route, APIRoute):
            route.operation_id = route.name
