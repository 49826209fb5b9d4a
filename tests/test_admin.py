from fastapi import FastAPI

from dayflow.core.admin import setup_admin


async def test_admin_registers_views(engine):
    admin = setup_admin(FastAPI(), engine)

    assert len(admin.views) == 4
