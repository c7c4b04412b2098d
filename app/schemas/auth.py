from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = Field(default="", alias="confirmPassword")

    class Config:
        populate_by_name = True


class UserLogin(BaseModel):
    email: str = ""
    password: str = ""


class UserResponse(BaseModel):
    id: str
    username: str
    email: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse
