from db import db
from services.passcode_service import PasscodeService, DatabasePasscodeStore
from services.data_transfer_service import DataTransferService

# Initialize services
passcode_service = PasscodeService(DatabasePasscodeStore(db))
data_transfer_service = DataTransferService(db)
