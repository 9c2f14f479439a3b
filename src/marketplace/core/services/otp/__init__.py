from .otp_manager import IssuedOtp, OtpManager, generate_otp_code

__all__ = ["IssuedOtp", "OtpManager", "generate_otp_code"]
