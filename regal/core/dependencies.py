from fastapi import Depends, Request

from .container import ApplicationContainer


def get_container(request: Request) -> ApplicationContainer:
    container = getattr(request.app.state, "container", None)
    if not container:
        raise RuntimeError("Application container not initialised.")
    return container


def get_settings(container: ApplicationContainer = Depends(get_container)):
    return container.settings


def get_token_service(container: ApplicationContainer = Depends(get_container)):
    return container.token_service


def get_account_service(container: ApplicationContainer = Depends(get_container)):
    return container.account_service


def get_password_reset_service(container: ApplicationContainer = Depends(get_container)):
    return container.password_reset_service


def get_company_service(container: ApplicationContainer = Depends(get_container)):
    return container.company_service


def get_product_service(container: ApplicationContainer = Depends(get_container)):
    return container.product_service


def get_image_service(container: ApplicationContainer = Depends(get_container)):
    return container.image_service


def get_email_service(container: ApplicationContainer = Depends(get_container)):
    return container.email_service
