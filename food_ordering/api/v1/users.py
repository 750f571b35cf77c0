import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from food_ordering.core.dependencies import get_identity_client, require_token
from food_ordering.core.errors import AppError, InternalError
from food_ordering.core.identity import IdentityClient
from food_ordering.core.messages import AuthMessages
from food_ordering.schemas.response import SuccessResponse
from food_ordering.schemas.user import SignInRequest, SignUpRequest, TokenResponse, UserResponse
from food_ordering.services import user_service

log = logging.getLogger(__name__)

# Sign-up and sign-in are public; everything else needs a bearer token
auth_router = APIRouter()
router = APIRouter(dependencies=[Depends(require_token)])


@auth_router.post("/auth/signup", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def sign_up_endpoint(payload: SignUpRequest, identity: IdentityClient = Depends(get_identity_client)):
    try:
        user = await user_service.sign_up(
            identity,
            name=payload.name,
            email=payload.email,
            password=payload.password,
            role=payload.role,
        )
        data = {
            "message": AuthMessages.SIGNUP_SUCCESS,
            "user": UserResponse.model_validate(user).model_dump(),
        }
        return SuccessResponse(data=data)
    except AppError as e:
        log.error(f"Sign-up failed for {payload.email}: {e.message}")
        raise
    except Exception:
        log.exception("Error signing up user")
        raise InternalError(AuthMessages.SIGNUP_FAILED)


@auth_router.post("/auth/signin", response_model=SuccessResponse)
async def sign_in_endpoint(payload: SignInRequest, identity: IdentityClient = Depends(get_identity_client)):
    try:
        token = await user_service.sign_in(identity, email=payload.email, password=payload.password)
        return SuccessResponse(data=TokenResponse(accessToken=token).model_dump())
    except AppError as e:
        log.error(f"Sign-in failed for {payload.email}: {e.message}")
        raise
    except Exception:
        log.exception("Error signing in user")
        raise InternalError(AuthMessages.SIGNIN_FAILED)


@router.get("/users", response_model=SuccessResponse)
async def list_users_endpoint():
    try:
        users = await user_service.list_users()
        return SuccessResponse(data=[UserResponse.model_validate(u).model_dump() for u in users])
    except AppError:
        raise
    except Exception:
        log.exception("Error fetching users")
        raise InternalError()


@router.get("/users/{user_id}", response_model=SuccessResponse)
async def get_user_endpoint(user_id: UUID):
    try:
        user = await user_service.get_user(user_id)
        return SuccessResponse(data=UserResponse.model_validate(user).model_dump())
    except AppError:
        raise
    except Exception:
        log.exception(f"Error fetching user with id {user_id}")
        raise InternalError()
