from pydantic import BaseModel

# Employee routes carry the login credentials in every request body
class EmployeeCredentials(BaseModel):
    email: str
    password: str
