from icar.apis.http_client import ApiClient
from icar.models.api_response import ApiResponse


class UserService(ApiClient):
    """Irepair (garage) directory."""

    def get_all_irepairs(self) -> ApiResponse:
        return self.make_request("GET", "/api/user/irepairs")

    def get_irepair_by_id(self, user_id: str) -> ApiResponse:
        return self.make_request("GET", f"/api/user/irepair/{user_id}")
