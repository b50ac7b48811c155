"""
App layer: HTTP 전송 (FastAPI).

역할:
- 레이아웃 이름 → YAML 조회, 요청 본문의 레코드 전달
- 생성된 문서를 응답 본문으로 전송
- ⚠️ 문서 생성 로직 없음 (services/render에 위임)
"""
