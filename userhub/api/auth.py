# userhub/api/auth.py

from datetime import timedelta
from fastapi import APIRouter, HTTPException, status, Depends
from fastapi.security import OAuth2PasswordRequestForm, OAuth2PasswordBearer
from loguru import logger

from userhub.api.deps import get_settings, get_user_service, unwrap
from userhub.api.schemas import Token, UserCreate, UserResponse, UserUpdate
from userhub.config import Settings
from userhub.core.entities import Role, User
from userhub.core.result import Err
from userhub.core.security import create_access_token, decode_access_token
from userhub.services.users import UserService


router = APIRouter()

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")


@router.post("/token", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    settings: Settings = Depends(get_settings),
    service: UserService = Depends(get_user_service),
):
    user = unwrap(await service.check_username_and_password(form_data.username, form_data.password))
    access_token = create_access_token(
        data={"sub": user.id, "username": user.username, "role": user.role.value},
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )
    logger.info(f"User {user.username} logged in")
    return {"access_token": access_token, "token_type": "bearer"}


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
    service: UserService = Depends(get_user_service),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    user_id = decode_access_token(token, settings.jwt_secret_key, settings.jwt_algorithm)
    if user_id is None:
        raise credentials_exception

    result = await service.find_by_id(user_id)
    if isinstance(result, Err):
        # token outlived its user
        raise credentials_exception
    return result.value


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != Role.ADMIN:
        logger.warning(f"User {current_user.username} denied admin access")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin role required")
    return current_user


@router.post("/users/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(body: UserCreate, service: UserService = Depends(get_user_service)):
    user = unwrap(await service.save(User(**body.model_dump())))
    logger.info(f"Registered user {user.username}")
    return UserResponse.from_user(user)


@router.get("/users/me", response_model=UserResponse)
async def read_users_me(current_user: User = Depends(get_current_user)):
    return UserResponse.from_user(current_user)


@router.put("/users/me", response_model=UserResponse)
async def update_users_me(
    body: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    # the stored hash is carried over untouched
    changes = body.model_dump(exclude_none=True)
    candidate = current_user.model_copy(update=changes)
    user = unwrap(await service.update(current_user.id, candidate))
    return UserResponse.from_user(user)
