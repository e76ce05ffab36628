"""
Playgrounds API endpoints.

Playground CRUD plus the nested pedagogue, event, participant and message
routes. Every handler delegates to the controller; typed failures are mapped
to status codes by the handlers registered in ``playhub.api.main``.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from playhub.api.deps import get_controller
from playhub.api.views import Ack, Created, EventView, PlaygroundView
from playhub.db import schemas
from playhub.services.controller import Controller

router = APIRouter(prefix="/playgrounds", tags=["playgrounds"])


def _ack(result) -> Ack:
    return Ack(n=result.n, acknowledged=result.acknowledged)


def _owned_event(controller: Controller, name: str, event_id: str) -> schemas.EventDetail:
    event = controller.get_event(event_id)
    if event.playground_name != name:
        raise HTTPException(status_code=404, detail=f"Event {event_id} not found in playground {name}")
    return event


def _owned_message(controller: Controller, name: str, message_id: str) -> schemas.Message:
    message = controller.get_message(message_id)
    if message.playground_name != name:
        raise HTTPException(status_code=404, detail=f"Message {message_id} not found in playground {name}")
    return message


@router.get("/", response_model=List[schemas.Playground])
def list_playgrounds(controller: Controller = Depends(get_controller)):
    return controller.list_playgrounds()


@router.post("/", response_model=Created, status_code=status.HTTP_201_CREATED)
def create_playground(payload: schemas.PlaygroundCreate, controller: Controller = Depends(get_controller)):
    return Created(id=controller.create_playground(payload))


@router.get("/{name}", response_model=PlaygroundView)
def get_playground(name: str, controller: Controller = Depends(get_controller)):
    return controller.get_playground(name)


@router.put("/{name}", response_model=Ack)
def update_playground(name: str, payload: schemas.PlaygroundBase, controller: Controller = Depends(get_controller)):
    if payload.name != name:
        raise HTTPException(status_code=400, detail="Playground name in body does not match path")
    return _ack(controller.update_playground(schemas.PlaygroundUpdate(**payload.model_dump())))


@router.delete("/{name}", response_model=Ack)
def delete_playground(name: str, controller: Controller = Depends(get_controller)):
    return _ack(controller.delete_playground(name))


# Pedagogues

@router.post("/{name}/pedagogues/{username}", status_code=status.HTTP_201_CREATED)
def add_pedagogue(name: str, username: str, controller: Controller = Depends(get_controller)):
    controller.add_pedagogue(name, username)
    return {"message": "assigned"}


@router.delete("/{name}/pedagogues/{username}")
def remove_pedagogue(name: str, username: str, controller: Controller = Depends(get_controller)):
    controller.remove_pedagogue(name, username)
    return {"message": "unassigned"}


# Events

@router.get("/{name}/events", response_model=List[schemas.Event])
def list_playground_events(name: str, controller: Controller = Depends(get_controller)):
    return controller.get_playground_events(name)


@router.post("/{name}/events", response_model=Created, status_code=status.HTTP_201_CREATED)
def add_event(name: str, payload: schemas.EventCreate, controller: Controller = Depends(get_controller)):
    return Created(id=controller.add_event(name, payload))


@router.get("/{name}/events/{event_id}", response_model=EventView)
def get_event(name: str, event_id: str, controller: Controller = Depends(get_controller)):
    return _owned_event(controller, name, event_id)


@router.put("/{name}/events/{event_id}", response_model=Ack)
def update_event(name: str, event_id: str, payload: schemas.EventBase, controller: Controller = Depends(get_controller)):
    _owned_event(controller, name, event_id)
    return _ack(controller.update_event(schemas.EventUpdate(id=event_id, **payload.model_dump())))


@router.delete("/{name}/events/{event_id}", response_model=Ack)
def remove_event(name: str, event_id: str, controller: Controller = Depends(get_controller)):
    _owned_event(controller, name, event_id)
    return _ack(controller.remove_event(event_id))


@router.post("/{name}/events/{event_id}/participants/{username}", status_code=status.HTTP_201_CREATED)
def add_participant(name: str, event_id: str, username: str, controller: Controller = Depends(get_controller)):
    _owned_event(controller, name, event_id)
    controller.add_participant(event_id, username)
    return {"message": "joined"}


@router.delete("/{name}/events/{event_id}/participants/{username}")
def remove_participant(name: str, event_id: str, username: str, controller: Controller = Depends(get_controller)):
    _owned_event(controller, name, event_id)
    controller.remove_participant(event_id, username)
    return {"message": "left"}


# Messages

@router.get("/{name}/messages", response_model=List[schemas.Message])
def list_playground_messages(name: str, controller: Controller = Depends(get_controller)):
    return controller.get_playground_messages(name)


@router.post("/{name}/messages", response_model=Created, status_code=status.HTTP_201_CREATED)
def add_message(name: str, payload: schemas.MessageCreate, controller: Controller = Depends(get_controller)):
    return Created(id=controller.add_message(name, payload))


@router.get("/{name}/messages/{message_id}", response_model=schemas.Message)
def get_message(name: str, message_id: str, controller: Controller = Depends(get_controller)):
    return _owned_message(controller, name, message_id)


@router.put("/{name}/messages/{message_id}", response_model=Ack)
def update_message(name: str, message_id: str, payload: schemas.MessageBase, controller: Controller = Depends(get_controller)):
    _owned_message(controller, name, message_id)
    return _ack(controller.update_message(schemas.MessageUpdate(id=message_id, **payload.model_dump())))


@router.delete("/{name}/messages/{message_id}", response_model=Ack)
def remove_message(name: str, message_id: str, controller: Controller = Depends(get_controller)):
    _owned_message(controller, name, message_id)
    return _ack(controller.remove_message(message_id))
