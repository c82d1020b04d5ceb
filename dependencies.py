from typing import Annotated

from fastapi import Depends, Request

from config import Settings
from gateway.proxy import ApiProxy, get_proxy
from models.requests import PaginationParams
from shared.constants import Pagination


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with"""
    return request.app.state.settings


def get_pagination(
    page: int = Pagination.DEFAULT_PAGE, limit: int = Pagination.DEFAULT_LIMIT
) -> PaginationParams:
    """Parse page/limit query parameters, enforcing the shared bounds"""
    return PaginationParams(page=page, limit=limit)


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
ProxyDep = Annotated[ApiProxy, Depends(get_proxy)]
PaginationDep = Annotated[PaginationParams, Depends(get_pagination)]
