from fastapi import Depends, Header

from doclink.config import Settings, get_settings

AppSettings = Depends(get_settings)


def get_viewer_id(
    x_viewer_id: str | None = Header(default=None),
    settings: Settings = AppSettings,
) -> str:
    if x_viewer_id and x_viewer_id.strip():
        return x_viewer_id.strip()
    return settings.operator_id
