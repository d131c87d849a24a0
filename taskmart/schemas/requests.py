from pydantic import BaseModel, ConfigDict, Field

# Every field is optional so the use cases can report the first missing or
# malformed field in their own order and wording.


class ForgotPasswordIn(BaseModel):
    email: str | None = Field(None, description="Email of the account", max_length=255)


class VerifyOTPIn(BaseModel):
    email: str | None = Field(None, description="Email of the account", max_length=255)
    otp: str | None = Field(None, description="Code received by email")


class ResetPasswordIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str | None = Field(None, description="Email of the account", max_length=255)
    otp: str | None = Field(None, description="Code received by email")
    new_password: str | None = Field(None, alias="newPassword")
    confirm_password: str | None = Field(None, alias="confirmPassword")
