"""
Reference Data API Endpoints.

Read-only listings of clients, products, employees, templates and customer
investment profiles.
"""

from fastapi import APIRouter, HTTPException

from api.errors import translate_errors
from api.models import (
    ClientResponse,
    DataResponse,
    EmployeeResponse,
    InvestmentProfileResponse,
    ListResponse,
    ProductResponse,
    TemplateResponse,
)
from repositories import reference_repository

router = APIRouter()


@router.get("/clients", response_model=ListResponse[ClientResponse], summary="List Clients")
def list_clients():
    with translate_errors("list clients"):
        clients = reference_repository.list_clients()
    return ListResponse[ClientResponse](
        data=[ClientResponse.from_domain(client) for client in clients],
        total=len(clients),
    )


@router.get("/products", response_model=ListResponse[ProductResponse], summary="List Products")
def list_products():
    with translate_errors("list products"):
        products = reference_repository.list_products()
    return ListResponse[ProductResponse](
        data=[ProductResponse.from_domain(product) for product in products],
        total=len(products),
    )


@router.get("/employees", response_model=ListResponse[EmployeeResponse], summary="List Employees")
def list_employees():
    with translate_errors("list employees"):
        employees = reference_repository.list_employees()
    return ListResponse[EmployeeResponse](
        data=[EmployeeResponse.from_domain(employee) for employee in employees],
        total=len(employees),
    )


@router.get("/templates", response_model=ListResponse[TemplateResponse], summary="List Templates")
def list_templates():
    with translate_errors("list templates"):
        templates = reference_repository.list_templates()
    return ListResponse[TemplateResponse](
        data=[TemplateResponse.from_domain(template) for template in templates],
        total=len(templates),
    )


@router.get(
    "/customer-profiles",
    response_model=ListResponse[InvestmentProfileResponse],
    summary="List Customer Investment Profiles"
)
def list_customer_profiles():
    with translate_errors("list customer profiles"):
        profiles = reference_repository.list_investment_profiles()
    return ListResponse[InvestmentProfileResponse](
        data=[InvestmentProfileResponse.from_domain(profile) for profile in profiles],
        total=len(profiles),
    )


@router.get(
    "/customer-profiles/{client_id}",
    response_model=DataResponse[InvestmentProfileResponse],
    summary="Get Customer Investment Profile"
)
def get_customer_profile(client_id: str):
    with translate_errors("fetch customer profile"):
        profile = reference_repository.get_investment_profile(client_id)

    if profile is None:
        raise HTTPException(status_code=404, detail=f"Customer profile not found: {client_id}")
    return DataResponse[InvestmentProfileResponse](data=InvestmentProfileResponse.from_domain(profile))
