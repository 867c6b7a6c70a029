"""附近酒店页面"""
import streamlit as st
import pandas as pd
from config import config
from services.gateway import StoreGateway
from services.proximity import ProximityService
from utils.exceptions import HotelError
from utils.transaction import transaction_scope


def page_nearby_hotels(ctx):
    st.title(f"🧭 {config.NEARBY_DISTANCE:g} 单位范围内的酒店")
    with st.form("nearby"):
        c1, c2 = st.columns(2)
        lat = c1.number_input("纬度", value=0.0, format="%.6f")
        lon = c2.number_input("经度", value=0.0, format="%.6f")
        submitted = st.form_submit_button("查询", type="primary")

    if submitted:
        try:
            with transaction_scope() as s:
                hotels = ProximityService.hotels_within_detail(StoreGateway(s), (lat, lon))
        except HotelError as e:
            st.error(str(e))
            return
        if not hotels:
            st.info("附近没有酒店")
            return
        st.dataframe(pd.DataFrame([{
            "酒店编号": h["id"], "酒店": h["name"], "距离": round(h["distance"], 2)
        } for h in hotels]), use_container_width=True)
        st.caption(f"共 {len(hotels)} 条")
