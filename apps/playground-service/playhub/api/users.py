"""
Users API endpoints.

User CRUD, the employee listing and password changes. Password hashes never
leave the service.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from playhub.api.deps import get_controller
from playhub.api.views import Ack, Created, UserView
from playhub.db import schemas
from playhub.services.controller import Controller

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=List[schemas.UserPublic])
def list_users(controller: Controller = Depends(get_controller)):
    return controller.list_users()


@router.get("/employees", response_model=List[schemas.UserPublic])
def list_employees(controller: Controller = Depends(get_controller)):
    return controller.list_employees()


@router.post("/", response_model=Created, status_code=status.HTTP_201_CREATED)
def create_user(payload: schemas.UserCreate, controller: Controller = Depends(get_controller)):
    return Created(id=controller.create_user(payload))


@router.get("/{username}", response_model=UserView)
def get_user(username: str, controller: Controller = Depends(get_controller)):
    return controller.get_user(username)


@router.put("/{username}", response_model=Ack)
def update_user(username: str, payload: schemas.UserUpdate, controller: Controller = Depends(get_controller)):
    if payload.username != username:
        raise HTTPException(status_code=400, detail="Username in body does not match path")
    result = controller.update_user(payload)
    return Ack(n=result.n, acknowledged=result.acknowledged)


@router.put("/{username}/password", response_model=Ack)
def change_password(username: str, payload: schemas.PasswordChange, controller: Controller = Depends(get_controller)):
    result = controller.change_password(username, payload.password)
    return Ack(n=result.n, acknowledged=result.acknowledged)


@router.delete("/{username}", response_model=Ack)
def delete_user(username: str, controller: Controller = Depends(get_controller)):
    result = controller.delete_user(username)
    return Ack(n=result.n, acknowledged=result.acknowledged)
