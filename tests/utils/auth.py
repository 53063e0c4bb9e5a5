from typing import Dict

from httpx import AsyncClient


async def sign_in(client: AsyncClient, email: str, password: str) -> Dict[str, str]:
    response = await client.post("/auth/sign-in", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['access_token']}"}
