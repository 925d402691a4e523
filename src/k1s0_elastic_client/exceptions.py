"""elastic_client ライブラリの例外型定義"""

from __future__ import annotations

from .response import Response


class ElasticClientErrorCodes:
    """ElasticClientError のエラーコード定数。"""

    INVALID_DOCUMENT: str = "INVALID_DOCUMENT"
    ENCODE_ERROR: str = "ENCODE_ERROR"
    TRANSPORT_ERROR: str = "TRANSPORT_ERROR"
    DECODE_ERROR: str = "DECODE_ERROR"
    SEARCH_ERROR: str = "SEARCH_ERROR"


class ElasticClientError(Exception):
    """elastic_client ライブラリのエラー基底クラス。

    response には、エラー発生時点までに復元できたレスポンスが入る。
    """

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
        response: Response | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.response = response
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class DocumentError(ElasticClientError):
    """Document の形式が不正な場合のエラー。I/O の前に送出される。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(
            code=ElasticClientErrorCodes.INVALID_DOCUMENT,
            message=message,
            cause=cause,
        )


class EncodeError(ElasticClientError):
    """リクエストボディの JSON シリアライズに失敗した場合のエラー。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(
            code=ElasticClientErrorCodes.ENCODE_ERROR,
            message=message,
            cause=cause,
        )


class TransportError(ElasticClientError):
    """通信失敗、または想定外のステータス (202-399) を受け取った場合のエラー。

    通信自体が失敗した場合の status は 0。
    """

    def __init__(
        self,
        message: str,
        status: int = 0,
        cause: Exception | None = None,
        response: Response | None = None,
    ) -> None:
        if response is None:
            response = Response(status=status)
        super().__init__(
            code=ElasticClientErrorCodes.TRANSPORT_ERROR,
            message=message,
            cause=cause,
            response=response,
        )
        self.status = status


class DecodeError(ElasticClientError):
    """レスポンスボディが期待した JSON として解釈できない場合のエラー。"""

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        response: Response | None = None,
    ) -> None:
        super().__init__(
            code=ElasticClientErrorCodes.DECODE_ERROR,
            message=message,
            cause=cause,
            response=response,
        )


class SearchError(ElasticClientError):
    """検索エンジンが報告したエラー。

    ボディ自体は正常にデコードできているため、response.raw を参照できる。
    """

    def __init__(
        self,
        msg: str,
        status_code: int,
        response: Response | None = None,
    ) -> None:
        super().__init__(
            code=ElasticClientErrorCodes.SEARCH_ERROR,
            message=msg,
            response=response,
        )
        self.msg = msg
        self.status_code = status_code

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.msg}"
