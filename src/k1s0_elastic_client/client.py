"""検索エンジン HTTP API クライアント"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from types import TracebackType
from typing import Any

from .bulk import encode_bulk, first_bulk_error
from .config import ClientConfig
from .decoder import decode_response
from .logger import get_logger
from .models import Document
from .request import BulkBody, ExtraArgs, JsonBody, RawBody, Request, name_list
from .response import Response
from .transport import HttpxTransport, Transport

logger = get_logger(__name__)


class Client:
    """検索エンジンの HTTP API クライアント。

    各操作はリクエストを 1 つ組み立て、1 回だけ通信してデコード済みの
    Response を返す。エンジンがエラーを報告した場合は SearchError を送出し、
    その response 属性からデコード済みのレスポンスを参照できる。
    """

    def __init__(self, config: ClientConfig, transport: Transport | None = None) -> None:
        self._config = config
        # 自前で作成したトランスポートだけを閉じる責任を持つ。
        self._owns_transport = transport is None
        self._transport = transport if transport is not None else HttpxTransport.from_config(config)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def with_transport(self, transport: Transport) -> Client:
        """同じ設定で別のトランスポートを使うクライアントを返す。

        このクライアントが自前で作成したトランスポートはここで閉じる。
        呼び出し側から渡されたトランスポートは閉じない。
        """
        if self._owns_transport:
            self._transport.close()
            self._owns_transport = False
        return Client(self._config, transport)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def do(self, request: Request) -> Response:
        """リクエストを実行してデコード済みのレスポンスを返す。"""
        content = request.content()
        path = request.path()
        logger.debug("elastic_request", method=request.method, path=path)
        result = self._transport.send(
            request.method,
            request.url(self._config.base_url),
            params=request.extra_args,
            content=content,
            headers=request.headers(),
        )
        logger.debug("elastic_response", method=request.method, path=path, status=result.status)
        return decode_response(request.method, result.status, result.body)

    # --- インデックス管理 ---

    def create_index(self, name: str, mapping: Any) -> Response:
        """マッピングを指定してインデックスを作成する。"""
        return self.do(Request.build("PUT", index_list=[name], body=JsonBody(mapping)))

    def delete_index(self, name: str) -> Response:
        return self.do(Request.build("DELETE", index_list=[name]))

    def refresh_index(self, name: str) -> Response:
        return self.do(Request.build("POST", index_list=[name], api="_refresh"))

    def update_index_settings(self, name: str, settings: Any) -> Response:
        """既存インデックスの設定を更新する。"""
        return self.do(
            Request.build("PUT", index_list=[name], api="_settings", body=JsonBody(settings))
        )

    def optimize(self, index_list: Sequence[str], extra_args: ExtraArgs = None) -> Response:
        return self.do(
            Request.build("POST", index_list=index_list, api="_optimize", extra_args=extra_args)
        )

    def stats(self, index_list: Sequence[str], extra_args: ExtraArgs = None) -> Response:
        """_stats を取得する。"""
        return self.do(
            Request.build("GET", index_list=index_list, api="_stats", extra_args=extra_args)
        )

    def index_status(self, index_list: Sequence[str]) -> Response:
        """_status を取得する。全インデックスの場合は ["_all"] を渡す。"""
        return self.do(Request.build("GET", index_list=index_list, api="_status"))

    def indices_exist(self, indexes: Sequence[str]) -> bool:
        """インデックスがすべて存在するかを HEAD で確認する。"""
        response = self.do(Request.build("HEAD", index_list=indexes))
        return response.status == 200

    # --- マッピング ---

    def put_mapping(self, type_name: str, mapping: Any, indexes: Sequence[str]) -> Response:
        return self.do(
            Request.build(
                "PUT",
                index_list=indexes,
                api=f"_mappings/{type_name}",
                body=JsonBody(mapping),
            )
        )

    def get_mapping(self, types: Sequence[str], indexes: Sequence[str]) -> Response:
        type_names = ",".join(name_list(types, "types"))
        return self.do(Request.build("GET", index_list=indexes, api=f"_mapping/{type_names}"))

    def delete_mapping(self, type_name: str, indexes: Sequence[str]) -> Response:
        """マッピングを、その型のデータごと削除する。"""
        return self.do(Request.build("DELETE", index_list=indexes, api=f"_mappings/{type_name}"))

    # --- エイリアス ---

    def _modify_alias(self, action: str, alias: str, indexes: Sequence[str]) -> Response:
        command = {
            "actions": [
                {action: {"index": index, "alias": alias}} for index in name_list(indexes, "indexes")
            ],
        }
        return self.do(Request.build("POST", api="_aliases", body=JsonBody(command)))

    def add_alias(self, alias: str, indexes: Sequence[str]) -> Response:
        return self._modify_alias("add", alias, indexes)

    def remove_alias(self, alias: str, indexes: Sequence[str]) -> Response:
        return self._modify_alias("remove", alias, indexes)

    def alias_exists(self, alias: str) -> bool:
        response = self.do(Request.build("HEAD", api=f"_alias/{alias}"))
        return response.status == 200

    # --- ドキュメント ---

    def bulk_send(self, documents: Iterable[Document]) -> Response:
        """複数のドキュメントを bulk API でまとめて送信する。

        HTTP ステータスが 2xx でも、いずれかのアイテムが失敗していれば
        最初に失敗したアイテムのエラーで SearchError を送出する。
        """
        data = encode_bulk(documents)
        response = self.do(Request.build("POST", api="_bulk", body=BulkBody(data)))
        error = first_bulk_error(response)
        if error is not None:
            raise error
        return response

    def get(
        self,
        index: str,
        doc_type: str,
        id: str,
        extra_args: ExtraArgs = None,
    ) -> Response:
        return self.do(
            Request.build("GET", index_list=[index], api=f"{doc_type}/{id}", extra_args=extra_args)
        )

    def index(self, document: Document, extra_args: ExtraArgs = None) -> Response:
        """ドキュメントを登録する。

        id がない場合は POST でエンジンに id を採番させ、ある場合は PUT で
        その id に登録する。
        """
        body = JsonBody(document.source()) if document.fields is not None else None
        if document.id is None:
            request = Request.build(
                "POST",
                index_list=[document.index],
                type_list=[document.type],
                extra_args=extra_args,
                body=body,
            )
        else:
            request = Request.build(
                "PUT",
                index_list=[document.index],
                type_list=[document.type],
                id=document.id,
                extra_args=extra_args,
                body=body,
            )
        return self.do(request)

    def delete(self, document: Document, extra_args: ExtraArgs = None) -> Response:
        return self.do(
            Request.build(
                "DELETE",
                index_list=[document.index],
                type_list=[document.type],
                id=document.require_id(),
                extra_args=extra_args,
            )
        )

    def update(self, document: Document, query: Any, extra_args: ExtraArgs = None) -> Response:
        """_update エンドポイントでドキュメントを部分更新する。"""
        # エンドポイントは <index>/<type>/<id>/_update
        return self.do(
            Request.build(
                "POST",
                index_list=[document.index],
                type_list=[document.type],
                api=f"{document.require_id()}/_update",
                extra_args=extra_args,
                body=JsonBody(query),
            )
        )

    # --- 検索 ---

    def search(
        self,
        query: Any,
        index_list: Sequence[str] = (),
        type_list: Sequence[str] = (),
        extra_args: ExtraArgs = None,
    ) -> Response:
        return self.do(
            Request.build(
                "POST",
                index_list=index_list,
                type_list=type_list,
                api="_search",
                extra_args=extra_args,
                body=JsonBody(query),
            )
        )

    def count(
        self,
        query: Any,
        index_list: Sequence[str] = (),
        type_list: Sequence[str] = (),
        extra_args: ExtraArgs = None,
    ) -> Response:
        """件数を取得する。結果は Response.count に入る。"""
        return self.do(
            Request.build(
                "POST",
                index_list=index_list,
                type_list=type_list,
                api="_count",
                extra_args=extra_args,
                body=JsonBody(query),
            )
        )

    def query(
        self,
        query: Any,
        index_list: Sequence[str],
        type_list: Sequence[str],
        http_method: str,
        extra_args: ExtraArgs = None,
    ) -> Response:
        """任意の HTTP メソッドで _query を実行する。

        http_method に "DELETE" を渡すと delete by query になる。
        """
        return self.do(
            Request.build(
                http_method,
                index_list=index_list,
                type_list=type_list,
                api="_query",
                extra_args=extra_args,
                body=JsonBody(query),
            )
        )

    def scan(
        self,
        query: Any,
        index_list: Sequence[str],
        type_list: Sequence[str],
        timeout: str,
        size: int,
    ) -> Response:
        """スクロールを開始する。続きは scroll() で Response.scroll_id を渡して取得する。"""
        return self.do(
            Request.build(
                "POST",
                index_list=index_list,
                type_list=type_list,
                api="_search",
                extra_args=[("search_type", "scan"), ("scroll", timeout), ("size", size)],
                body=JsonBody(query),
            )
        )

    def scroll(self, scroll_id: str, timeout: str) -> Response:
        """スクロール ID で次のページを取得する。"""
        return self.do(
            Request.build(
                "POST",
                api="_search/scroll",
                extra_args=[("scroll", timeout)],
                body=RawBody(scroll_id.encode("utf-8")),
            )
        )


def new_client(host: str, port: int = 9200, transport: Transport | None = None) -> Client:
    """HTTP で接続するクライアントを作成する。"""
    return Client(ClientConfig(host=host, port=port), transport)


def new_https_client(host: str, port: int = 9200, transport: Transport | None = None) -> Client:
    """HTTPS で接続するクライアントを作成する。"""
    return Client(ClientConfig(host=host, port=port, https=True), transport)
