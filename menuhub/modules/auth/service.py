import logging
from fastapi import HTTPException
from menuhub.modules.auth.schemas import LoginRequest, LoginResponse
from menuhub.modules.restaurants.service import RestaurantDirectoryService
from menuhub.modules.tenants.schemas import TenantCredential
from menuhub.modules.tenants.service import TenantSessionManager

logger = logging.getLogger(__name__)


class RestaurantAuthService:
    def __init__(self, directory: RestaurantDirectoryService, sessions: TenantSessionManager):
        self.directory = directory
        self.sessions = sessions

    def login(self, login_data: LoginRequest) -> LoginResponse:
        """Find the restaurant whose own Supabase Auth accepts these credentials and store its session"""
        restaurants = self.directory.list_restaurants()

        matched = None
        auth_user = None
        for restaurant in restaurants:
            try:
                client = self.sessions.connect(
                    restaurant.supabase_url,
                    restaurant.supabase_anon_key,
                    keep_signed_in=login_data.keep_signed_in
                )
                auth_response = client.auth.sign_in_with_password({
                    "email": login_data.email,
                    "password": login_data.password
                })
            except Exception as e:
                # Wrong project for this user; keep looking
                logger.debug(f"Sign-in rejected by restaurant {restaurant.id}: {e}")
                continue

            if auth_response is not None and auth_response.user:
                matched = restaurant
                auth_user = auth_response.user
                break

        if matched is None:
            raise HTTPException(
                status_code=401,
                detail="Invalid email or password. Please check your credentials and try again."
            )

        credential = TenantCredential(
            id=matched.id,
            name=matched.name,
            base_url=matched.supabase_url,
            api_key=matched.supabase_anon_key,
            keep_signed_in=login_data.keep_signed_in,
            user={"id": str(auth_user.id), "email": auth_user.email},
        )
        self.sessions.store_credential(credential)
        self.sessions.remember_keep_signed_in(login_data.keep_signed_in)

        return LoginResponse(
            restaurant_id=matched.id,
            restaurant_name=matched.name,
            user_id=str(auth_user.id),
            email=auth_user.email or login_data.email,
            keep_signed_in=login_data.keep_signed_in,
            message=f"Welcome to {matched.name}!"
        )
