"""
Per-step validators for the job wizard.

Each validator reads a session and returns ``{field: message}``; an empty
dict means the step may be left. Validators never raise for user input.
"""

from typing import Callable, Dict, List

from dispatch_wizard.config.settings import settings
from dispatch_wizard.domain.entities.job_document import (
    InventoryLineRequest,
    JobDocument,
    resolve_zone,
)
from dispatch_wizard.domain.entities.wizard_session import WizardSession
from dispatch_wizard.domain.value_objects.job_type import JobType
from dispatch_wizard.domain.value_objects.wizard_step import WizardStep

Errors = Dict[str, str]
StepValidator = Callable[[WizardSession], Errors]


def validate_customer(session: WizardSession) -> Errors:
    if not session.data.customer_id:
        return {"customer_id": "Please select a customer"}
    return {}


def validate_schedule(session: WizardSession) -> Errors:
    """Job type, anchor date, rental duration and pickup plan dates."""
    doc = session.data
    errors: Errors = {}

    if doc.job_type is None:
        errors["job_type"] = "Please select a job type"
        return errors

    try:
        resolve_zone(doc.timezone)
    except ValueError as e:
        errors["timezone"] = str(e)

    if doc.job_type == JobType.PICKUP:
        if not doc.pickup_plan.pickup_date:
            errors["pickup_date"] = "Please select a pickup date"
    elif not doc.scheduled_date:
        errors["scheduled_date"] = "Please select a date"

    if doc.job_type == JobType.DELIVERY:
        errors.update(_validate_rental_duration(doc))
        errors.update(_validate_pickup_plan_dates(doc))
    elif doc.service_end_date and doc.scheduled_date and doc.service_end_date < doc.scheduled_date:
        errors["service_end_date"] = "Service end date cannot be before the start date"

    return errors


def _validate_rental_duration(doc: JobDocument) -> Errors:
    days = doc.rental_duration_days
    hours = doc.rental_duration_hours
    if days and hours:
        return {"rental_duration": "Choose a duration in days or in hours, not both"}
    if days is not None:
        if days < 1:
            return {"rental_duration_days": "Rental duration must be at least 1 day"}
        return {}
    if hours is not None:
        if hours < 1 or hours > settings.MAX_RENTAL_HOURS:
            return {
                "rental_duration_hours": (
                    f"Rental duration must be between 1 and {settings.MAX_RENTAL_HOURS} hours"
                )
            }
        return {}
    return {"rental_duration": "Please enter a rental duration"}


def _validate_pickup_plan_dates(doc: JobDocument) -> Errors:
    plan = doc.pickup_plan
    errors: Errors = {}
    final_pickup = doc.final_pickup_date

    if plan.create_pickup_job and not final_pickup:
        errors["pickup_date"] = "Please select a pickup date"

    if not plan.create_partial_pickups:
        return errors

    for index, partial in enumerate(plan.partial_pickups):
        key = f"partial_pickups.{index}.date"
        if not partial.date:
            errors[key] = "Please select a date for this partial pickup"
        elif doc.scheduled_date and partial.date < doc.scheduled_date:
            errors[key] = "Partial pickup cannot be before the delivery date"
        elif final_pickup and partial.date >= final_pickup:
            errors[key] = "Partial pickup must be before the final pickup date"
        elif doc.scheduled_date and partial.date == doc.scheduled_date:
            errors[key] = "Partial pickup must be after the delivery date"
    return errors


def validate_location(session: WizardSession) -> Errors:
    selection = session.data.location_selection
    if selection is None or not selection.is_resolved:
        return {"location": "Please select a saved location or enter an address"}
    return {}


def validate_crew(session: WizardSession) -> Errors:
    """Crew is optional, but a known availability conflict blocks advancing."""
    report = session.availability
    if report is None or not report.has_conflicts or not session.wizard_mode.creates_jobs():
        return {}
    errors: Errors = {"assignment": "Resolve availability conflicts before continuing"}
    if report.driver_conflict:
        errors["assignment.driver_id"] = report.driver.describe()
    if report.vehicle_conflict:
        errors["assignment.vehicle_id"] = report.vehicle.describe()
    return errors


def validate_inventory(session: WizardSession) -> Errors:
    doc = session.data
    errors: Errors = {}

    if doc.job_type == JobType.DELIVERY and not doc.items:
        errors["items"] = "Add at least one item to deliver"

    for index, item in enumerate(doc.items):
        errors.update(_validate_line(item, f"items.{index}"))

    primary_products = {item.product_id for item in doc.items}
    plan = doc.pickup_plan
    if plan.create_pickup_job:
        for index, item in enumerate(plan.main_pickup_items):
            errors.update(
                _validate_pickup_line(item, f"main_pickup_items.{index}", primary_products)
            )
    if plan.create_partial_pickups:
        for pickup_index, partial in enumerate(plan.partial_pickups):
            for index, item in enumerate(partial.items):
                errors.update(
                    _validate_pickup_line(
                        item, f"partial_pickups.{pickup_index}.items.{index}", primary_products
                    )
                )
    return errors


def _validate_line(item: InventoryLineRequest, key: str) -> Errors:
    if item.quantity < 1:
        return {f"{key}.quantity": "Quantity must be at least 1"}
    if item.specific_item_ids and len(item.specific_item_ids) > item.quantity:
        return {f"{key}.specific_item_ids": "More units selected than the requested quantity"}
    return {}


def _validate_pickup_line(item: InventoryLineRequest, key: str, primary_products: set) -> Errors:
    if item.product_id not in primary_products:
        return {f"{key}.product_id": "Only delivered items can be picked up"}
    if item.quantity < 1:
        return {f"{key}.quantity": "Pickup quantity must be at least 1"}
    return {}


def validate_services(session: WizardSession) -> Errors:
    doc = session.data
    errors: Errors = {}
    if doc.job_type == JobType.SERVICE and not doc.services:
        errors["services"] = "Select at least one service"
    for service in doc.services:
        reason = service.frequency.incomplete_reason()
        if reason:
            errors[f"services.{service.id}.frequency"] = reason
    return errors


def validate_final(session: WizardSession) -> Errors:
    """Conflicts block submitting jobs; quotes may still be prepared."""
    if session.wizard_mode.creates_jobs() and session.has_conflicts:
        return {"availability": "Resolve availability conflicts before submitting"}
    return {}


VALIDATORS: Dict[WizardStep, StepValidator] = {
    WizardStep.CUSTOMER: validate_customer,
    WizardStep.SCHEDULE: validate_schedule,
    WizardStep.LOCATION: validate_location,
    WizardStep.CREW: validate_crew,
    WizardStep.INVENTORY: validate_inventory,
    WizardStep.SERVICES: validate_services,
    WizardStep.REVIEW: validate_final,
    WizardStep.QUOTE_PREVIEW: validate_final,
}


def validate_steps(session: WizardSession, steps: List[WizardStep]) -> Errors:
    """Run the validators of several steps, merging their errors."""
    errors: Errors = {}
    for step in steps:
        errors.update(VALIDATORS[step](session))
    return errors
