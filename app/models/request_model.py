from pydantic import BaseModel, EmailStr


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str


class LoginRequest(BaseModel):
    # не EmailStr: неверный формат email тоже должен давать 401 "Invalid credentials"
    email: str
    password: str
