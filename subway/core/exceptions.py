# custom exception 정의 및 관리


class SubwayException(Exception):  # 예외 구조 정의
    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class DuplicateNameError(SubwayException):
    def __init__(self, message: str = "같은 이름이 이미 존재합니다"):
        super().__init__(message, code="DUPLICATE_NAME")


class StationNotFoundError(SubwayException):
    def __init__(self, message: str = "역을 찾을 수 없습니다"):
        super().__init__(message, code="STATION_NOT_FOUND")


class LineNotFoundError(SubwayException):
    def __init__(self, message: str = "노선을 찾을 수 없습니다"):
        super().__init__(message, code="LINE_NOT_FOUND")


class InvalidSectionError(SubwayException):
    def __init__(self, message: str = "유효하지 않은 구간입니다"):
        super().__init__(message, code="INVALID_SECTION")


class StationInUseError(SubwayException):
    def __init__(self, message: str = "구간에 등록된 역은 삭제할 수 없습니다"):
        super().__init__(message, code="STATION_IN_USE")


# 구간 데이터가 단일 경로가 아니거나, 사라진 역을 참조하는 경우
class RouteConsistencyError(SubwayException):
    def __init__(self, message: str = "노선 구간 정보가 올바르지 않습니다"):
        super().__init__(message, code="ROUTE_INCONSISTENT")
